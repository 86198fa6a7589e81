"""CLI utilities package."""

from .helpers import (
    ExitCode,
    handle_error,
    load_active_config,
    resolve_config_source,
    resolve_format,
    save_active_config,
    validate_format_support,
)
from .options import output_option, tier_field_options

__all__ = [
    "ExitCode",
    "resolve_format",
    "resolve_config_source",
    "handle_error",
    "load_active_config",
    "save_active_config",
    "validate_format_support",
    "output_option",
    "tier_field_options",
]
