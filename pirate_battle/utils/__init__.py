"""Utility functions and constants for Pirate Battle."""

from .constants import (
    ACTIONS_PER_TURN,
    INITIAL_SCAN_CHARGES,
    INITIAL_SHIELD_CHARGES,
    MAP_SIZE,
    MAX_PLAYERS,
    MAX_SHIPS_PER_PLAYER,
    MIN_PLAYERS,
    RESOURCE_NAMES,
    RNG_SEED_DEFAULT,
)
from .distance import Coordinate, chebyshev_distance, euclidean_distance, manhattan_distance
from .rng import GameRNG, hash_seed

__all__ = [
    "ACTIONS_PER_TURN",
    "INITIAL_SCAN_CHARGES",
    "INITIAL_SHIELD_CHARGES",
    "MAP_SIZE",
    "MAX_PLAYERS",
    "MAX_SHIPS_PER_PLAYER",
    "MIN_PLAYERS",
    "RESOURCE_NAMES",
    "RNG_SEED_DEFAULT",
    "Coordinate",
    "chebyshev_distance",
    "euclidean_distance",
    "manhattan_distance",
    "GameRNG",
    "hash_seed",
]
