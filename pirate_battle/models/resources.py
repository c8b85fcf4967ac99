"""Resource ledger data model."""

import math
from dataclasses import dataclass, fields

from ..utils.constants import RESOURCE_NAMES, RESOURCE_VALUE_WEIGHTS


@dataclass(frozen=True)
class Resources:
    """Named resource counters held by a player, or a cost/yield line.

    All counters are non-negative integers. Arithmetic returns new instances;
    a subtraction that would go below zero raises ValueError through
    ``__post_init__``, so callers must check ``shortfall`` first.
    """

    gold: int = 0
    crew: int = 0
    cannons: int = 0
    supplies: int = 0
    wood: int = 0
    rum: int = 0

    def __post_init__(self):
        """Validate counters after initialization."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int):
                raise ValueError(f"Invalid {f.name}: {value!r} (must be an int)")
            if value < 0:
                raise ValueError(f"Invalid {f.name}: {value} (must be >= 0)")

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "Resources":
        """Build from a partial mapping; missing names are zero."""
        return cls(**{name: int(data.get(name, 0)) for name in RESOURCE_NAMES})

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in RESOURCE_NAMES}

    def plus(self, other: "Resources") -> "Resources":
        return Resources(**{n: getattr(self, n) + getattr(other, n) for n in RESOURCE_NAMES})

    def minus(self, other: "Resources") -> "Resources":
        """Subtract a cost.

        Raises:
            ValueError: If any counter would drop below zero
        """
        return Resources(**{n: getattr(self, n) - getattr(other, n) for n in RESOURCE_NAMES})

    def scaled(self, multipliers: dict[str, float]) -> "Resources":
        """Multiply selected counters and floor the result.

        Args:
            multipliers: Resource name -> factor; names not listed keep factor 1.0

        Returns:
            New Resources with each counter floored to an int
        """
        return Resources(
            **{
                n: math.floor(getattr(self, n) * multipliers.get(n, 1.0) + 1e-9)
                for n in RESOURCE_NAMES
            }
        )

    def shortfall(self, cost: "Resources") -> tuple[str, int, int] | None:
        """Find the first line item this ledger cannot pay.

        Args:
            cost: Resources required

        Returns:
            (resource name, required, available) for the first unmet item in
            canonical order, or None if the cost is affordable
        """
        for name in RESOURCE_NAMES:
            required = getattr(cost, name)
            available = getattr(self, name)
            if required > available:
                return name, required, available
        return None

    def can_afford(self, cost: "Resources") -> bool:
        return self.shortfall(cost) is None

    def total(self) -> int:
        """Plain sum of all counters."""
        return sum(getattr(self, n) for n in RESOURCE_NAMES)

    def value(self) -> int:
        """Weighted aggregate used for the resource victory condition."""
        return sum(getattr(self, n) * RESOURCE_VALUE_WEIGHTS[n] for n in RESOURCE_NAMES)

    def is_empty(self) -> bool:
        return self.total() == 0
