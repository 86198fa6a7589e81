"""Configuration commands for the TPV CLI."""

from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from ...config_paths import get_env_vars, get_user_config_dir, get_user_config_path
from ...constraints import DISCOUNT_CONSTRAINT, MRR_CONSTRAINT
from ...currency import get_currency, is_supported
from ...errors import ConfigurationError
from ...serialization import YAML_SUFFIXES, config_to_dict, dumps, load_config
from ..formatters import (
    create_console,
    format_config_summary,
    format_json,
    format_paths_json,
    format_paths_table,
    format_tiers_table,
)
from ..utils import (
    ExitCode,
    handle_error,
    load_active_config,
    output_option,
    save_active_config,
    validate_format_support,
)


@click.group(name="config")
def config_group() -> None:
    """Show, edit, import and export the pricing configuration."""
    pass


@config_group.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show the active configuration."""
    try:
        config = load_active_config(ctx.obj)
        format_type = ctx.obj["format"]

        if format_type == "json":
            format_json(config_to_dict(config))
        elif format_type == "yaml":
            click.echo(yaml.safe_dump(config_to_dict(config), default_flow_style=False, sort_keys=False).rstrip())
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            console.print(f"[bold]Source:[/bold] {ctx.obj.get('config_source', 'Unknown')}")
            format_config_summary(config, console)
            format_tiers_table(config, console)

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@config_group.command(name="set")
@click.argument("key", type=click.Choice(["mrr", "discount", "currency"], case_sensitive=False))
@click.argument("value", type=str)
@click.pass_context
def set_value(ctx: click.Context, key: str, value: str) -> None:
    """Set the revenue floor (mrr), discount percentage or currency code.

    Numbers are clamped: mrr to at least 0, discount to 0-100.
    """
    try:
        config = load_active_config(ctx.obj)
        key = key.lower()

        if key == "currency":
            if not is_supported(value):
                handle_error(click.BadParameter(f"Unsupported currency '{value}'"), ExitCode.INVALID_USAGE)
                return
            updated = config.replace(currency=get_currency(value).code)
        elif key == "mrr":
            updated = config.replace(mrr=MRR_CONSTRAINT.normalize(value))
        else:
            updated = config.replace(discount=DISCOUNT_CONSTRAINT.normalize(value))

        path = save_active_config(ctx.obj, updated)
        click.echo(f"Set {key} = {getattr(updated, key)} -> {path}")

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@config_group.command(name="export")
@output_option
@click.pass_context
def export_config(ctx: click.Context, output: Optional[str] = None) -> None:
    """Export the active configuration as a JSON (or YAML) document."""
    try:
        format_type = ctx.obj["format"]
        if output and Path(output).suffix.lower() in YAML_SUFFIXES:
            format_type = "yaml"
        try:
            format_type = validate_format_support(format_type, ["json", "yaml"], "config export", ctx.obj)
        except click.BadParameter as e:
            handle_error(e, ExitCode.INVALID_USAGE)
            return

        config = load_active_config(ctx.obj)
        if format_type == "yaml":
            text = yaml.safe_dump(config_to_dict(config), default_flow_style=False, sort_keys=False, allow_unicode=True)
        else:
            text = dumps(config) + "\n"

        if output:
            Path(output).write_text(text, encoding="utf-8")
            click.echo(f"Exported configuration to {output}", err=True)
        else:
            click.echo(text.rstrip())

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@config_group.command(name="import")
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_context
def import_config(ctx: click.Context, file: str) -> None:
    """Import a JSON (or YAML) document as the active configuration."""
    try:
        config = load_config(file)
        path = save_active_config(ctx.obj, config)
        click.echo(f"Imported {len(config.tiers)} tiers from {file} -> {path}")

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@config_group.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show the resolved configuration paths and environment."""
    try:
        active_path = ctx.obj.get("config_path")
        info: Dict[str, Dict[str, Any]] = {
            "active": {
                "value": str(active_path) if active_path else None,
                "exists": active_path.is_file() if active_path else None,
                "source": ctx.obj.get("config_source"),
            },
            "user_config_dir": {"value": str(get_user_config_dir()), "exists": get_user_config_dir().is_dir()},
            "user_config_file": {"value": str(get_user_config_path()), "exists": get_user_config_path().is_file()},
        }
        for name, value in get_env_vars().items():
            info[name] = {"value": value, "exists": None}

        format_type = ctx.obj["format"]
        if format_type == "json":
            format_json(format_paths_json(info))
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            console.print(f"[bold]Source:[/bold] {ctx.obj.get('config_source', 'Unknown')}")
            format_paths_table(info, console)

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
