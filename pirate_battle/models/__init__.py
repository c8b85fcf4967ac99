"""Data models for Pirate Battle."""

from .game import GameEvent, GameState, GameStatus, Weather, WeatherKind
from .intent import (
    ActivateShield,
    Attack,
    BuildShip,
    ClaimTerritory,
    CollectResources,
    EndTurn,
    Intent,
    IntentKind,
    Move,
    Resign,
    ScanCoordinate,
    UseAbility,
)
from .player import Player
from .resources import Resources
from .ship import Ability, AbilityCategory, Effect, EffectKind, Ship, ShipType
from .tile import GameMap, TerrainKind, Tile

__all__ = [
    "Ability",
    "AbilityCategory",
    "ActivateShield",
    "Attack",
    "BuildShip",
    "ClaimTerritory",
    "CollectResources",
    "Effect",
    "EffectKind",
    "EndTurn",
    "GameEvent",
    "GameMap",
    "GameState",
    "GameStatus",
    "Intent",
    "IntentKind",
    "Move",
    "Player",
    "Resign",
    "Resources",
    "ScanCoordinate",
    "Ship",
    "ShipType",
    "TerrainKind",
    "Tile",
    "UseAbility",
    "Weather",
    "WeatherKind",
]
