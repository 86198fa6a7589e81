"""Cost curve calculation.

``calculate`` turns a PricingConfig into a Curve sampled at every
consumption level where the slope of the cost curve changes:

1. Tiers are walked in ascending sequence. Each repetition contributes a
   breakpoint at its start, at the end of its free allowance (when there is
   one, already carrying the repetition's fee) and at its end, where the
   billable units are added to the running raw cost.
2. Unlimited tiers are rendered for DISPLAY_REPETITIONS repetitions and end
   the walk; tiers sequenced after them are never reached.
3. The raw cost is floored at the configured MRR, then discounted. The
   marginal rate is suppressed while the raw cost is still absorbed by the
   floor.
"""

import functools
from typing import List, NamedTuple, Optional

from .logging import LogEvent, log_debug
from .models import Curve, Finite, PricingConfig, Tier, Unlimited

# Repetitions rendered for an unlimited tier
DISPLAY_REPETITIONS = 5


class Breakpoint(NamedTuple):
    """A consumption level where the slope of the raw cost curve changes."""

    label: float
    raw: float
    # Rate of the segment ending at this breakpoint
    rate: float


def effective_repetitions(tier: Tier) -> int:
    """Number of repetitions of ``tier`` that are rendered."""
    multiplier = tier.multiplier
    if isinstance(multiplier, Finite):
        return multiplier.count
    if isinstance(multiplier, Unlimited):
        return DISPLAY_REPETITIONS
    raise TypeError(f"Unknown multiplier {multiplier!r}")


def _append(points: List[Breakpoint], point: Breakpoint) -> None:
    """Append ``point``, merging it into the last point at the same label."""
    if points and points[-1].label == point.label:
        points[-1] = point
    else:
        points.append(point)


def accumulate(config: PricingConfig) -> List[Breakpoint]:
    """Build the raw (pre-floor, pre-discount) breakpoints of ``config``."""
    points = [Breakpoint(0.0, 0.0, 0.0)]
    offset = 0.0
    raw = 0.0

    for tier in config.sorted_tiers:
        if tier.units <= 0:
            continue
        billable = tier.units - tier.free_units
        end_rate = tier.unit_price if billable > 0 else 0.0

        for _ in range(effective_repetitions(tier)):
            _append(points, Breakpoint(offset, raw, points[-1].rate))
            # The fee is due as soon as the repetition is entered
            raw += tier.price
            if tier.free_units > 0:
                _append(points, Breakpoint(offset + tier.free_units, raw, 0.0))
            raw += billable * tier.unit_price
            _append(points, Breakpoint(offset + tier.units, raw, end_rate))
            offset += tier.units

        if tier.is_unlimited:
            break

    return points


def calculate(config: PricingConfig) -> Curve:
    """Compute the cost curve for ``config``.

    Args:
        config: Pricing configuration; it is never mutated

    Returns:
        Curve with cumulative, average and marginal values per breakpoint
    """
    points = accumulate(config)
    factor = config.discount_factor
    mrr = config.mrr

    labels: List[float] = []
    cumulative: List[float] = []
    average: List[Optional[float]] = []
    current: List[float] = []

    for point in points:
        total = max(point.raw, mrr) * factor
        labels.append(point.label)
        cumulative.append(total)
        average.append(total / point.label if point.label > 0 else None)
        current.append(point.rate * factor if point.raw > mrr else 0.0)

    log_debug(
        LogEvent.CALCULATION,
        "Calculated pricing curve",
        tiers=len(config.tiers),
        breakpoints=len(labels),
        max_units=labels[-1],
    )
    return Curve(
        labels=tuple(labels),
        cumulative=tuple(cumulative),
        average=tuple(average),
        current=tuple(current),
    )


class PricingEngine:
    """Holds the current configuration and caches its curve.

    The configuration is replaced wholesale; reading ``curve`` after a
    replacement recomputes it.
    """

    def __init__(self, config: Optional[PricingConfig] = None, cache_size: int = 32):
        """Initialize the engine.

        Args:
            config: Initial configuration; the default schedule when None
            cache_size: Number of recent configurations whose curves are kept
        """
        if cache_size < 1:
            raise ValueError("cache_size must be at least 1")
        self._config = config if config is not None else PricingConfig.default()
        self._calculate = functools.lru_cache(maxsize=cache_size)(calculate)

    @property
    def config(self) -> PricingConfig:
        """The current configuration."""
        return self._config

    @config.setter
    def config(self, value: PricingConfig) -> None:
        self._config = value

    @property
    def curve(self) -> Curve:
        """Curve of the current configuration."""
        return self._calculate(self._config)

    def update(self, **changes) -> Curve:
        """Replace configuration fields and return the new curve."""
        self._config = self._config.replace(**changes)
        return self.curve

    def clear_cache(self) -> None:
        """Drop all cached curves."""
        self._calculate.cache_clear()
