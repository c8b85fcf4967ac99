"""Conversion of engine values to JSON-friendly views.

Used by the HTTP host and the CLI to present states, reports and decisions.
This is a one-way view for transport and display; states are not rebuilt
from it.
"""

import dataclasses
from enum import Enum
from typing import Any

from ..models.game import GameEvent, GameState
from ..models.player import Player
from ..models.ship import Ship


def to_jsonable(value: Any) -> Any:
    """Recursively convert dataclasses, enums, tuples and sets to JSON types.

    Dict keys that are coordinates become "x,y" strings.
    """
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {_key(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [to_jsonable(v) for v in sorted(value)]
    return value


def _key(key: Any) -> Any:
    if isinstance(key, tuple):
        return ",".join(str(part) for part in key)
    if isinstance(key, Enum):
        return key.value
    return key


def serialize_ship(ship: Ship) -> dict:
    return {
        "id": ship.id,
        "owner": ship.owner,
        "type": ship.ship_type.value,
        "health": ship.health,
        "maxHealth": ship.max_health,
        "attack": ship.attack,
        "defense": ship.defense,
        "speed": ship.speed,
        "position": list(ship.position),
        "ability": {
            "name": ship.ability.name,
            "category": ship.ability.category.value,
            "remainingCooldown": ship.ability.remaining_cooldown,
            "ready": ship.ability.ready,
        },
        "effects": [to_jsonable(e) for e in ship.effects],
        "alive": ship.alive,
    }


def serialize_player(player: Player, private: bool = False) -> dict:
    """Serialize a player.

    Args:
        player: Player to serialize
        private: Include what only the player knows (scanned terrain)
    """
    data = {
        "id": player.id,
        "resources": player.resources.as_dict(),
        "ships": [serialize_ship(s) for s in player.ships],
        "territories": [list(c) for c in sorted(player.controlled_territories)],
        "score": player.score,
        "active": player.active,
        "scanCharges": player.scan_charges,
        "shieldCharges": player.shield_charges,
        "shielded": player.shielded,
        "actionsRemaining": player.actions_remaining,
        "collectedThisTurn": player.collected_this_turn,
        "averageDecisionTimeMs": round(player.average_decision_time_ms, 1),
    }
    if private:
        data["scannedTiles"] = {f"{x},{y}": kind.value for (x, y), kind in player.scanned_tiles.items()}
        data["revealedTiles"] = [list(c) for c in sorted(player.revealed_tiles)]
    return data


def serialize_event(event: GameEvent) -> dict:
    return {
        "turn": event.turn,
        "playerId": event.player_id,
        "kind": event.kind,
        "data": to_jsonable(event.data),
        "shielded": event.shielded,
    }


def serialize_state(state: GameState, viewer: str | None = None) -> dict:
    """Serialize a full snapshot for display.

    Args:
        state: Snapshot to serialize
        viewer: Player whose private knowledge is included, if any

    Returns:
        Dictionary of JSON-friendly values
    """
    current = state.current_player
    return {
        "seed": state.seed,
        "status": state.status.value,
        "turn": state.turn,
        "currentPlayer": current.id if current else None,
        "maxPlayers": state.max_players,
        "weather": {
            "kind": state.weather.kind.value,
            "turnsRemaining": state.weather.turns_remaining,
            "movement": state.weather.movement_modifier,
            "damage": state.weather.damage_modifier,
            "resource": state.weather.resource_modifier,
        },
        "winner": state.winner,
        "victoryCondition": state.victory_condition,
        "map": {
            "size": state.game_map.size,
            "tiles": [
                {"x": t.x, "y": t.y, "kind": t.kind.value, "owner": t.owner}
                for t in state.game_map.iter_tiles()
            ],
        },
        "players": [serialize_player(p, private=p.id == viewer) for p in state.players],
        "eventCount": len(state.events),
    }
