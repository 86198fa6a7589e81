"""Main CLI application for the Tier Pricing Visualizer."""

import json
from typing import Optional

import click
import rich_click as rich_click

from ..logging import LogEvent, configure_logging, log_debug
from .utils import resolve_config_source, resolve_format

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def _library_version() -> str:
    try:
        from .. import __version__

        return __version__
    except ImportError:
        return "unknown"


def _show_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"TPV CLI version: {_library_version()}")
    ctx.exit()


def _show_json_help(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Show comprehensive JSON help and exit."""
    if not value or ctx.resilient_parsing:
        return

    output_option = {"name": "--output", "short": "-o", "type": "path", "help": "Write output to file instead of stdout"}
    help_data = {
        "command": "tpv",
        "description": "Tier Pricing Visualizer CLI - compute and inspect tiered usage-based price curves",
        "usage": "tpv [OPTIONS] COMMAND [ARGS]...",
        "version": _library_version(),
        "global_options": [
            {
                "name": "--config",
                "type": "path",
                "help": "Configuration file to use. Takes precedence over TPV_CONFIG_PATH.",
                "required": False,
            },
            {
                "name": "--format",
                "type": "choice",
                "choices": ["table", "json", "csv", "yaml"],
                "help": "Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
                "required": False,
            },
            {"name": "--verbose", "short": "-v", "type": "count", "help": "Increase verbosity.", "required": False},
            {"name": "--quiet", "short": "-q", "type": "count", "help": "Decrease verbosity.", "required": False},
            {"name": "--debug", "type": "flag", "help": "Enable debug-level logging.", "required": False},
            {"name": "--no-color", "type": "flag", "help": "Disable color output.", "required": False},
            {"name": "--version", "type": "flag", "help": "Print version information.", "required": False},
            {
                "name": "--help-json",
                "type": "flag",
                "help": "Show help in JSON format for programmatic use.",
                "required": False,
            },
        ],
        "commands": {
            "curve": {"description": "Compute the cost curve of the active configuration", "options": [output_option]},
            "chart": {"description": "Print the chart description of the cost curve", "options": [output_option]},
            "tiers": {
                "description": "Inspect and edit pricing tiers",
                "subcommands": {
                    "list": {"description": "List tiers", "options": []},
                    "add": {
                        "description": "Add a tier",
                        "options": [
                            {"name": "--sequence", "type": "integer", "help": "Tier order (defaults to last + 1)"},
                            {"name": "--units", "type": "string", "help": "Units per repetition"},
                            {"name": "--price", "type": "string", "help": "Fixed price per repetition"},
                            {"name": "--unit-price", "type": "string", "help": "Price per billable unit"},
                            {"name": "--free-units", "type": "string", "help": "Free units per repetition"},
                            {"name": "--multiplier", "type": "string", "help": "Repetitions, or 'infinity'"},
                        ],
                    },
                    "remove": {
                        "description": "Remove a tier",
                        "arguments": [{"name": "index", "type": "integer", "required": True}],
                    },
                    "set": {
                        "description": "Set one field of a tier",
                        "arguments": [
                            {"name": "index", "type": "integer", "required": True},
                            {"name": "field", "type": "string", "required": True},
                            {"name": "value", "type": "string", "required": True},
                        ],
                    },
                },
            },
            "config": {
                "description": "Show, edit, import and export the pricing configuration",
                "subcommands": {
                    "show": {"description": "Show the active configuration", "options": []},
                    "set": {
                        "description": "Set mrr, discount or currency",
                        "arguments": [
                            {"name": "key", "type": "choice", "choices": ["mrr", "discount", "currency"]},
                            {"name": "value", "type": "string"},
                        ],
                    },
                    "export": {"description": "Export the configuration document", "options": [output_option]},
                    "import": {
                        "description": "Import a configuration document",
                        "arguments": [{"name": "file", "type": "path", "required": True}],
                    },
                    "paths": {"description": "Show resolved configuration paths", "options": []},
                },
            },
            "currencies": {"description": "List supported currencies", "options": []},
        },
        "exit_codes": {
            "0": "Success",
            "1": "Generic error",
            "2": "Invalid usage",
            "3": "Tier not found",
            "4": "Configuration source missing/corrupt",
        },
        "environment_variables": ["TPV_CONFIG_PATH", "TPV_CURRENCY"],
    }

    click.echo(json.dumps(help_data, indent=2, sort_keys=True))
    ctx.exit()


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Configuration file to use. Takes precedence over TPV_CONFIG_PATH environment variable.",
)
@click.option(
    "--format",
    type=click.Choice(["table", "json", "csv", "yaml"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option(
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_show_version,
    help="Print version information.",
)
@click.option(
    "--help-json",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_show_json_help,
    help="Show help in JSON format for programmatic use.",
)
@click.pass_context
def app(
    ctx: click.Context,
    config_path: Optional[str] = None,
    format: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """Tier Pricing Visualizer CLI - compute and inspect tiered price curves.

    Tiers are stored in a JSON (or YAML) configuration document. Editing
    commands write the document back to where it was read from, or to the
    user configuration directory.

    Examples:
      # Show the cost curve of the default schedule
      tpv curve

      # Make the third tier repeat forever
      tpv tiers set 3 multiplier infinity

      # Raise the revenue floor
      tpv config set mrr 250
    """
    # Store global options in context for subcommands
    ctx.ensure_object(dict)

    source = resolve_config_source(config_path)
    resolved_format = resolve_format(format)

    # Configure logging level based on verbosity
    log_level = "WARNING"
    if debug:
        log_level = "DEBUG"
    elif verbose > quiet:
        if verbose >= 2:
            log_level = "DEBUG"
        elif verbose >= 1:
            log_level = "INFO"
    elif quiet > verbose:
        log_level = "ERROR"

    configure_logging(log_level, no_color=no_color)
    log_debug(LogEvent.CLI, "Resolved configuration source", source=source["source"], path=str(source["path"]))

    ctx.obj.update(
        {
            "config_path": source["path"],
            "config_source": source["source"],
            "format": resolved_format,
            "format_explicit": format is not None,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group exists to avoid circular imports
from .commands import config, currencies, curve, tiers  # noqa: E402

app.add_command(curve.curve)
app.add_command(curve.chart)
app.add_command(tiers.tiers)
app.add_command(config.config_group)
app.add_command(currencies.currencies)


if __name__ == "__main__":
    app()
