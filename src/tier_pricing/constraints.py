"""Input constraints and normalization.

Raw input (form fields, CLI arguments, slider positions) is clamped and
coerced here before it reaches the calculation engine, which assumes
validated non-negative values.
"""

import math
from typing import Any, Dict, Mapping, Optional, Union

from .errors import TierValidationError
from .logging import LogEvent, log_debug
from .models import UNLIMITED, Finite, Multiplier, Tier, Unlimited

# Slider position that stands for an unlimited multiplier
UNLIMITED_SLIDER_POSITION = 10

_UNLIMITED_TOKENS = {"∞", "inf", "infinity"}


class NumericConstraint:
    """Constraint for numeric fields."""

    def __init__(
        self,
        min_value: float = 0.0,
        max_value: Optional[float] = None,
        allow_float: bool = True,
        allow_int: bool = True,
        description: str = "",
        slider_max: Optional[float] = None,
    ):
        """Initialize numeric constraint.

        Args:
            min_value: Minimum allowed value
            max_value: Maximum allowed value, or None for no upper limit
            allow_float: Whether floating point values are allowed
            allow_int: Whether integer values are allowed
            description: Description of the field
            slider_max: Upper end of the field's slider, if it has one
        """
        self.min_value = min_value
        self.max_value = max_value
        self.allow_float = allow_float
        self.allow_int = allow_int
        self.description = description
        self.slider_max = slider_max

    def validate(self, name: str, value: Any) -> None:
        """Validate a value against this constraint.

        Args:
            name: Field name for error messages
            value: Value to validate

        Raises:
            TierValidationError: If validation fails
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TierValidationError(
                f"Field '{name}' must be a number, got {type(value).__name__}.",
                field=name,
                value=value,
            )

        if isinstance(value, float) and not self.allow_float:
            if not value.is_integer():
                raise TierValidationError(
                    f"Field '{name}' must be an integer, got float {value}.\n"
                    f"Description: {self.description}",
                    field=name,
                    value=value,
                )
        if isinstance(value, int) and not self.allow_int:
            raise TierValidationError(
                f"Field '{name}' must be a float, got integer {value}.\n"
                f"Description: {self.description}",
                field=name,
                value=value,
            )

        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            raise TierValidationError(
                f"Field '{name}' must be a finite number, got {value}.\n"
                f"Description: {self.description}",
                field=name,
                value=value,
            )

        if value < self.min_value or (self.max_value is not None and value > self.max_value):
            max_desc = str(self.max_value) if self.max_value is not None else "unlimited"
            raise TierValidationError(
                f"Field '{name}' must be between {self.min_value} and {max_desc}.\n"
                f"Description: {self.description}\n"
                f"Current value: {value}",
                field=name,
                value=value,
            )

    def normalize(self, value: Any) -> Union[int, float]:
        """Coerce ``value`` to a number inside the allowed range.

        Strings are parsed; anything unparseable becomes the minimum.
        """
        number = _to_number(value)
        if number is None:
            number = self.min_value
        number = max(number, self.min_value)
        if self.max_value is not None:
            number = min(number, self.max_value)
        if not self.allow_float:
            return int(number)
        return number

    def slider_position(self, value: float) -> float:
        """Clamp ``value`` into the slider's range."""
        upper = self.slider_max if self.slider_max is not None else self.max_value
        position = max(value, self.min_value)
        return min(position, upper) if upper is not None else position


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if isinstance(number, float) and (math.isnan(number) or math.isinf(number)):
        return None
    return number


FIELD_CONSTRAINTS: Dict[str, NumericConstraint] = {
    "sequence": NumericConstraint(min_value=1, allow_float=False, description="Evaluation order"),
    "units": NumericConstraint(min_value=0, description="Units per repetition", slider_max=2000),
    "price": NumericConstraint(min_value=0, description="Fixed fee per repetition", slider_max=500),
    "unit_price": NumericConstraint(min_value=0, description="Price per billable unit", slider_max=50),
    "free_units": NumericConstraint(min_value=0, description="Unbilled units per repetition", slider_max=500),
}

MRR_CONSTRAINT = NumericConstraint(min_value=0, description="Minimum recurring revenue", slider_max=5000)

DISCOUNT_CONSTRAINT = NumericConstraint(min_value=0, max_value=100, description="Discount percentage")


def parse_multiplier(raw: Any) -> Multiplier:
    """Parse a multiplier from user input.

    "∞", "inf" and "infinity" (any case) mean unlimited; a positive integer
    is a finite count; anything else falls back to 1.
    """
    if isinstance(raw, (Finite, Unlimited)):
        return raw
    if isinstance(raw, float) and math.isinf(raw) and raw > 0:
        return UNLIMITED
    text = str(raw).strip().lower()
    if text in _UNLIMITED_TOKENS:
        return UNLIMITED
    try:
        count = int(text)
    except ValueError:
        try:
            count = int(float(text))
        except (ValueError, OverflowError):
            log_debug(LogEvent.INPUT_NORMALIZATION, "Unparseable multiplier, using 1", raw=raw)
            return Finite(1)
    return Finite(count) if count >= 1 else Finite(1)


def format_multiplier(multiplier: Multiplier) -> str:
    """Render a multiplier for display ("∞" or the count)."""
    if isinstance(multiplier, Unlimited):
        return "∞"
    return str(multiplier.count)


def multiplier_to_slider(multiplier: Multiplier) -> int:
    """Map a multiplier to a slider position between 1 and 10."""
    if isinstance(multiplier, Unlimited):
        return UNLIMITED_SLIDER_POSITION
    return min(multiplier.count, UNLIMITED_SLIDER_POSITION - 1)


def slider_to_multiplier(position: int) -> Multiplier:
    """Map a slider position to a multiplier; the top position is unlimited."""
    if position >= UNLIMITED_SLIDER_POSITION:
        return UNLIMITED
    return Finite(max(1, int(position)))


def normalize_tier(raw: Mapping[str, Any], default_sequence: int = 1) -> Tier:
    """Build a Tier from loosely typed input, clamping every field.

    Keys may be snake_case or the camelCase used by the JSON format.
    Free units are capped at the repetition size.
    """

    def pick(snake: str, camel: str) -> Any:
        if snake in raw:
            return raw[snake]
        return raw.get(camel)

    sequence_raw = raw.get("sequence")
    sequence = FIELD_CONSTRAINTS["sequence"].normalize(
        sequence_raw if sequence_raw is not None else default_sequence
    )
    units = FIELD_CONSTRAINTS["units"].normalize(raw.get("units"))
    if units <= 0:
        log_debug(LogEvent.INPUT_NORMALIZATION, "Empty repetition size, using 1", sequence=sequence)
        units = 1
    price = FIELD_CONSTRAINTS["price"].normalize(raw.get("price"))
    unit_price = FIELD_CONSTRAINTS["unit_price"].normalize(pick("unit_price", "unitPrice"))
    free_units = FIELD_CONSTRAINTS["free_units"].normalize(pick("free_units", "freeUnits"))
    if free_units > units:
        log_debug(
            LogEvent.INPUT_NORMALIZATION,
            "Capping free units at repetition size",
            sequence=sequence,
            free_units=free_units,
            units=units,
        )
        free_units = units

    multiplier_raw = raw.get("multiplier")
    multiplier = parse_multiplier(multiplier_raw) if multiplier_raw is not None else Finite(1)

    return Tier(
        sequence=int(sequence),
        units=units,
        price=price,
        unit_price=unit_price,
        free_units=free_units,
        multiplier=multiplier,
    )
