"""Named AI difficulty presets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DifficultyProfile:
    """Weights that shape how the AI scores options.

    Higher tiers are more aggressive, less noisy, look further ahead and
    care more about counter-exposure and multi-turn territory.
    """

    name: str  # Preset name
    aggressiveness: float  # 0.0-1.0; also bounds jitter at (1 - aggressiveness)
    lookahead: int  # Number of look-ahead factors considered (1-4)
    territory_weight: float  # Weight on immediate territorial value
    damage_weight: float  # Weight on expected damage dealt
    exposure_weight: float  # Weight on expected counter-exposure
    horizon_weight: float  # Weight on territory reachable next turn
    resource_weight: float  # Weight on resource efficiency

    def __post_init__(self):
        """Validate profile data after initialization."""
        if not (0.0 <= self.aggressiveness <= 1.0):
            raise ValueError(f"Invalid aggressiveness: {self.aggressiveness} (must be 0.0-1.0)")
        if self.lookahead < 1:
            raise ValueError(f"Invalid lookahead: {self.lookahead} (must be >= 1)")


NOVICE = DifficultyProfile(
    name="novice",
    aggressiveness=0.3,
    lookahead=1,
    territory_weight=1.0,
    damage_weight=0.6,
    exposure_weight=0.0,
    horizon_weight=0.0,
    resource_weight=0.5,
)

PIRATE = DifficultyProfile(
    name="pirate",
    aggressiveness=0.6,
    lookahead=2,
    territory_weight=1.0,
    damage_weight=1.0,
    exposure_weight=0.5,
    horizon_weight=0.3,
    resource_weight=0.8,
)

CAPTAIN = DifficultyProfile(
    name="captain",
    aggressiveness=0.75,
    lookahead=3,
    territory_weight=1.1,
    damage_weight=1.2,
    exposure_weight=0.8,
    horizon_weight=0.5,
    resource_weight=1.0,
)

ADMIRAL = DifficultyProfile(
    name="admiral",
    aggressiveness=0.9,
    lookahead=4,
    territory_weight=1.2,
    damage_weight=1.4,
    exposure_weight=1.0,
    horizon_weight=0.8,
    resource_weight=1.0,
)

PROFILES = {p.name: p for p in (NOVICE, PIRATE, CAPTAIN, ADMIRAL)}


def get_profile(name: str) -> DifficultyProfile:
    """Look up a preset by name.

    Raises:
        ValueError: If no preset has that name
    """
    try:
        return PROFILES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown difficulty: {name} (must be one of {', '.join(PROFILES)})") from None
