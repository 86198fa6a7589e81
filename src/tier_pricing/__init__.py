"""Tiered, usage-based pricing calculator.

This package models a tiered pricing schedule (repeating tiers with fixed
fees, per-unit rates, free allowances and unlimited tiers, plus a revenue
floor and a discount) and computes the resulting cost curve: cumulative
cost, average unit cost and marginal cost at every consumption level where
the slope changes.
"""

# Version of the package
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _version

    __version__ = _version("tier-pricing-visualizer")
except PackageNotFoundError:
    # Running from a source checkout without installation
    __version__ = "0.0.0"

# Import main components for easier access
from .chart import build_chart_spec
from .constraints import (
    DISCOUNT_CONSTRAINT,
    FIELD_CONSTRAINTS,
    MRR_CONSTRAINT,
    NumericConstraint,
    format_multiplier,
    normalize_tier,
    parse_multiplier,
)
from .currency import CURRENCIES, Currency, format_amount, get_currency
from .engine import DISPLAY_REPETITIONS, PricingEngine, calculate
from .errors import (
    ConfigFileNotFoundError,
    ConfigurationError,
    InvalidConfigFormatError,
    LastTierError,
    PricingError,
    TierNotFoundError,
    TierValidationError,
)
from .models import (
    DEFAULT_TIERS,
    UNLIMITED,
    Curve,
    CurvePoint,
    Finite,
    Multiplier,
    PricingConfig,
    Tier,
    Unlimited,
)
from .serialization import config_from_dict, config_to_dict, dumps, load_config, loads, save_config

# Define public API
__all__ = [
    # Engine
    "calculate",
    "PricingEngine",
    "DISPLAY_REPETITIONS",
    # Data model
    "PricingConfig",
    "Tier",
    "Finite",
    "Unlimited",
    "UNLIMITED",
    "Multiplier",
    "DEFAULT_TIERS",
    "Curve",
    "CurvePoint",
    # Serialization
    "config_to_dict",
    "config_from_dict",
    "dumps",
    "loads",
    "load_config",
    "save_config",
    # Input validation and normalization
    "NumericConstraint",
    "FIELD_CONSTRAINTS",
    "MRR_CONSTRAINT",
    "DISCOUNT_CONSTRAINT",
    "normalize_tier",
    "parse_multiplier",
    "format_multiplier",
    # Presentation
    "build_chart_spec",
    "Currency",
    "CURRENCIES",
    "get_currency",
    "format_amount",
    # Errors
    "PricingError",
    "ConfigurationError",
    "ConfigFileNotFoundError",
    "InvalidConfigFormatError",
    "LastTierError",
    "TierValidationError",
    "TierNotFoundError",
]
