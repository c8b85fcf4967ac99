"""Seedable RNG wrapper for deterministic gameplay."""

import random


class GameRNG:
    """Wrapper around Python's random.Random for deterministic game behavior.

    Every random roll in the engine (map layout, hazards, weather) and the AI
    jitter goes through this class, so two runs from the same seed and the
    same intents produce the same states.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness
        """
        self.seed = seed
        self.rng = random.Random(seed)

    @classmethod
    def derived(cls, *parts: int | str) -> "GameRNG":
        """Build an independent RNG from a tuple of seed parts.

        Used where a roll must be reproducible from a snapshot alone without
        advancing the game's own stream (AI jitter).

        Args:
            *parts: Values identifying the roll (seed, turn, player, ...)

        Returns:
            New GameRNG seeded from the joined parts
        """
        return cls(hash_seed(*parts))

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return self.rng.randint(a, b)

    def choice(self, seq):
        """Choose random element from non-empty sequence."""
        return self.rng.choice(seq)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self.rng.random()

    def uniform(self, a: float, b: float) -> float:
        """Return random float in [a, b].

        Args:
            a: Lower bound
            b: Upper bound

        Returns:
            Random float between a and b
        """
        return self.rng.uniform(a, b)

    def chance(self, probability: float) -> bool:
        """Roll a single event with the given probability.

        Args:
            probability: Chance of success in [0.0, 1.0]

        Returns:
            True if the event happens
        """
        return self.rng.random() < probability


def hash_seed(*parts: int | str) -> int:
    """Fold seed parts into a stable integer seed.

    Python's built-in ``hash`` is salted per process for strings, so the parts
    are folded with a fixed FNV-1a loop instead.
    """
    value = 2166136261
    for byte in "|".join(str(p) for p in parts).encode("utf-8"):
        value ^= byte
        value = (value * 16777619) & 0xFFFFFFFF
    return value
