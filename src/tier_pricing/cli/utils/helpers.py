"""Helper functions for CLI operations."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from ...config_paths import ENV_CONFIG_PATH, ENV_CURRENCY, get_config_path, get_env_vars, get_save_path
from ...currency import get_currency, is_supported
from ...logging import LogEvent, log_info, log_warning
from ...models import PricingConfig
from ...serialization import load_config, save_config


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    TIER_NOT_FOUND = 3
    CONFIG_SOURCE_ERROR = 4


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def validate_format_support(
    format_type: str,
    supported_formats: List[str],
    command_name: str,
    ctx_obj: Dict[str, Any],
) -> str:
    """Validate format support for a command with consistent fallback behavior.

    Args:
        format_type: The requested format
        supported_formats: List of supported formats for this command
        command_name: Name of the command for error messages
        ctx_obj: Click context object containing verbosity settings

    Returns:
        The validated format (may be changed from input for fallback)

    Raises:
        click.BadParameter: For unsupported formats that can't fall back
    """
    if format_type in supported_formats:
        return format_type

    # Common fallback behavior for table/csv
    if format_type in ["table", "csv"]:
        fallback_format = "json" if "json" in supported_formats else supported_formats[0]
        # Only show message in verbose mode to avoid cluttering output
        if ctx_obj.get("verbose", 0) > 0:
            click.echo(
                f"Note: {command_name} doesn't support '{format_type}' format, using {fallback_format} instead.",
                err=True,
            )
        return fallback_format
    else:
        supported_list = "', '".join(supported_formats)
        raise click.BadParameter(f"Format '{format_type}' is not supported for {command_name}. Use '{supported_list}'.")


def resolve_config_source(cli_path: Optional[str] = None) -> Dict[str, Any]:
    """Resolve which configuration file is active and where it came from.

    Precedence: --config flag > TPV_CONFIG_PATH > user config file > defaults.

    Args:
        cli_path: Path given with --config

    Returns:
        Dictionary with ``path`` (or None) and ``source``
    """
    if cli_path:
        return {"path": Path(cli_path), "source": "CLI flag (--config)"}

    env_vars = get_env_vars()
    path = get_config_path()
    if path is None:
        return {"path": None, "source": "Built-in defaults"}
    if env_vars.get(ENV_CONFIG_PATH) and str(path) == env_vars[ENV_CONFIG_PATH]:
        return {"path": path, "source": "Environment variable (TPV_CONFIG_PATH)"}
    return {"path": path, "source": "User config file"}


def load_active_config(ctx_obj: Dict[str, Any]) -> PricingConfig:
    """Load the configuration the current invocation works on.

    A missing file yields the default schedule. TPV_CURRENCY, when set to a
    supported code, overrides the stored currency.

    Args:
        ctx_obj: Click context object

    Returns:
        The active configuration
    """
    path: Optional[Path] = ctx_obj.get("config_path")
    if path is not None and path.is_file():
        config = load_config(path)
    else:
        if path is not None:
            log_info(LogEvent.CLI, "Configuration file does not exist yet, using defaults", path=str(path))
        config = PricingConfig.default()

    currency_override = get_env_vars().get(ENV_CURRENCY)
    if currency_override:
        if is_supported(currency_override):
            config = config.replace(currency=get_currency(currency_override).code)
        else:
            log_warning(LogEvent.CLI, f"Ignoring unsupported {ENV_CURRENCY} value '{currency_override}'")
    return config


def save_active_config(ctx_obj: Dict[str, Any], config: PricingConfig) -> Path:
    """Persist an edited configuration.

    Writes to the --config path when given, otherwise to the save path.

    Args:
        ctx_obj: Click context object
        config: Configuration to write

    Returns:
        The path written
    """
    if ctx_obj.get("config_source") == "CLI flag (--config)":
        target = ctx_obj["config_path"]
    else:
        target = get_save_path()
    return save_config(config, target)
