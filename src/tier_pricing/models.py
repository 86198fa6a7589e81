"""Pricing data structures.

A pricing schedule is an ordered set of tiers. Each tier is a block of units
billed repeatedly: a fixed fee per repetition plus a per-unit rate on the
units beyond the free allowance. A tier repeats either a finite number of
times or indefinitely.

Configurations are immutable values; every edit returns a new configuration.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

from .currency import is_supported
from .errors import ConfigurationError, LastTierError, TierNotFoundError, TierValidationError


@dataclass(frozen=True)
class Finite:
    """A tier that repeats ``count`` times before the next tier starts."""

    count: int

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 1:
            raise TierValidationError(
                f"Multiplier must be a positive integer, got {self.count!r}",
                field="multiplier",
                value=self.count,
            )

    def __str__(self) -> str:
        return str(self.count)


@dataclass(frozen=True)
class Unlimited:
    """A tier that repeats indefinitely once reached."""

    def __str__(self) -> str:
        return "∞"


UNLIMITED = Unlimited()

Multiplier = Union[Finite, Unlimited]


@dataclass(frozen=True)
class Tier:
    """One pricing band, applied repeatedly.

    - sequence: evaluation order (ascending)
    - units: size of one repetition's consumption block
    - price: fixed fee charged once per entered repetition
    - unit_price: rate per billable unit within a repetition
    - free_units: leading portion of each repetition not billed at unit_price
    - multiplier: Finite(n) or UNLIMITED
    """

    sequence: int
    units: float
    price: float = 0.0
    unit_price: float = 0.0
    free_units: float = 0.0
    multiplier: Multiplier = field(default_factory=lambda: Finite(1))

    def __post_init__(self) -> None:
        if isinstance(self.sequence, bool) or not isinstance(self.sequence, int) or self.sequence < 1:
            raise TierValidationError(
                f"Tier sequence must be a positive integer, got {self.sequence!r}",
                field="sequence",
                value=self.sequence,
            )
        if self.units <= 0:
            raise TierValidationError(
                f"Tier {self.sequence}: units must be positive, got {self.units}",
                field="units",
                value=self.units,
                sequence=self.sequence,
            )
        for name in ("price", "unit_price", "free_units"):
            value = getattr(self, name)
            if value < 0:
                raise TierValidationError(
                    f"Tier {self.sequence}: {name} must be non-negative, got {value}",
                    field=name,
                    value=value,
                    sequence=self.sequence,
                )
        if self.free_units > self.units:
            raise TierValidationError(
                f"Tier {self.sequence}: free_units ({self.free_units}) cannot exceed units ({self.units})",
                field="free_units",
                value=self.free_units,
                sequence=self.sequence,
            )
        if not isinstance(self.multiplier, (Finite, Unlimited)):
            raise TierValidationError(
                f"Tier {self.sequence}: multiplier must be Finite or Unlimited, got {self.multiplier!r}",
                field="multiplier",
                value=self.multiplier,
                sequence=self.sequence,
            )

    @property
    def is_unlimited(self) -> bool:
        """Whether the tier absorbs all consumption once reached."""
        return isinstance(self.multiplier, Unlimited)

    @property
    def repetition_cost(self) -> float:
        """Cost of one fully consumed repetition."""
        return self.price + (self.units - self.free_units) * self.unit_price


DEFAULT_TIERS: Tuple[Tier, ...] = (
    Tier(sequence=1, units=100, price=0, unit_price=10, free_units=10, multiplier=Finite(1)),
    Tier(sequence=2, units=200, price=50, unit_price=7, free_units=0, multiplier=Finite(2)),
    Tier(sequence=3, units=500, price=0, unit_price=3, free_units=0, multiplier=UNLIMITED),
)


@dataclass(frozen=True)
class PricingConfig:
    """A complete pricing schedule.

    - currency: supported currency code (stored upper-case), used for labels only
    - mrr: minimum recurring revenue floor
    - discount: percentage (0-100) applied to every displayed amount
    - tiers: tiers in insertion order; evaluation uses ascending sequence
    """

    currency: str = "USD"
    mrr: float = 0.0
    discount: float = 0.0
    tiers: Tuple[Tier, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable of tiers but store a tuple so the value stays hashable
        if not isinstance(self.tiers, tuple):
            object.__setattr__(self, "tiers", tuple(self.tiers))
        if not isinstance(self.currency, str) or not is_supported(self.currency):
            raise ConfigurationError(f"Unsupported currency {self.currency!r}")
        object.__setattr__(self, "currency", self.currency.upper())
        if self.mrr < 0:
            raise ConfigurationError(f"mrr must be non-negative, got {self.mrr}")
        if not 0 <= self.discount <= 100:
            raise ConfigurationError(f"discount must be between 0 and 100, got {self.discount}")
        seen = set()
        for tier in self.tiers:
            if tier.sequence in seen:
                raise ConfigurationError(f"Duplicate tier sequence {tier.sequence}")
            seen.add(tier.sequence)

    @classmethod
    def default(cls) -> "PricingConfig":
        """Return the built-in three-tier schedule."""
        return cls(tiers=DEFAULT_TIERS)

    @property
    def sorted_tiers(self) -> List[Tier]:
        """Tiers in evaluation order."""
        return sorted(self.tiers, key=lambda t: t.sequence)

    @property
    def discount_factor(self) -> float:
        """Multiplier applied to every displayed amount."""
        return 1 - self.discount / 100

    def replace(self, **changes: Any) -> "PricingConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.tiers):
            raise TierNotFoundError(
                f"No tier at index {index} (configuration has {len(self.tiers)} tiers)",
                index=index,
            )

    def add_tier(self, tier: Optional[Tier] = None) -> "PricingConfig":
        """Append a tier; without an argument a default tier is sequenced last."""
        if tier is None:
            next_sequence = max((t.sequence for t in self.tiers), default=0) + 1
            tier = Tier(sequence=next_sequence, units=100, price=0, unit_price=5, free_units=0)
        return self.replace(tiers=self.tiers + (tier,))

    def remove_tier(self, index: int) -> "PricingConfig":
        """Remove the tier at ``index`` (insertion order)."""
        self._check_index(index)
        if len(self.tiers) <= 1:
            raise LastTierError("A pricing configuration needs at least one tier")
        return self.replace(tiers=self.tiers[:index] + self.tiers[index + 1 :])

    def update_tier(self, index: int, **changes: Any) -> "PricingConfig":
        """Replace fields of the tier at ``index`` (insertion order)."""
        self._check_index(index)
        updated = dataclasses.replace(self.tiers[index], **changes)
        return self.replace(tiers=self.tiers[:index] + (updated,) + self.tiers[index + 1 :])


class CurvePoint(NamedTuple):
    """One aligned sample of a Curve."""

    label: float
    cumulative: float
    average: Optional[float]
    current: float


@dataclass(frozen=True)
class Curve:
    """Cost curve sampled at every slope change.

    All four sequences have equal length. ``average[0]`` is None because
    the first label is always 0.
    """

    labels: Tuple[float, ...]
    cumulative: Tuple[float, ...]
    average: Tuple[Optional[float], ...]
    current: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.labels)

    def points(self) -> Iterator[CurvePoint]:
        """Iterate over aligned samples."""
        for values in zip(self.labels, self.cumulative, self.average, self.current):
            yield CurvePoint(*values)

    def to_dict(self) -> Dict[str, List[Any]]:
        """Return the curve as plain lists."""
        return {
            "labels": list(self.labels),
            "cumulative": list(self.cumulative),
            "average": list(self.average),
            "current": list(self.current),
        }
