"""Tier editing commands for the TPV CLI."""

import csv
import dataclasses
import io

import click
import yaml

from ...constraints import format_multiplier, normalize_tier
from ...errors import ConfigurationError, LastTierError, TierNotFoundError
from ...logging import LogEvent, log_info
from ...serialization import tier_to_dict
from ..formatters import create_console, format_json, format_tiers_json, format_tiers_table
from ..utils import ExitCode, handle_error, load_active_config, save_active_config, tier_field_options

# CLI field name -> key understood by normalize_tier
EDITABLE_FIELDS = {
    "sequence": "sequence",
    "units": "units",
    "price": "price",
    "unit-price": "unitPrice",
    "free-units": "freeUnits",
    "multiplier": "multiplier",
}


@click.group()
def tiers() -> None:
    """Inspect and edit pricing tiers."""
    pass


@tiers.command(name="list")
@click.pass_context
def list_tiers(ctx: click.Context) -> None:
    """List the tiers of the active configuration."""
    try:
        config = load_active_config(ctx.obj)
        format_type = ctx.obj["format"]

        if format_type == "json":
            format_json(format_tiers_json(config))
        elif format_type == "yaml":
            click.echo(yaml.safe_dump(format_tiers_json(config), default_flow_style=False, sort_keys=True).rstrip())
        elif format_type == "csv":
            output = io.StringIO()
            writer = csv.writer(output)
            writer.writerow(["index", "sequence", "units", "price", "unitPrice", "freeUnits", "multiplier"])
            for index, tier in enumerate(config.tiers, start=1):
                writer.writerow(
                    [
                        index,
                        tier.sequence,
                        tier.units,
                        tier.price,
                        tier.unit_price,
                        tier.free_units,
                        format_multiplier(tier.multiplier),
                    ]
                )
            click.echo(output.getvalue().strip())
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_tiers_table(config, console)

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@tiers.command()
@tier_field_options
@click.pass_context
def add(
    ctx: click.Context,
    sequence: int,
    units: str,
    price: str,
    unit_price: str,
    free_units: str,
    multiplier: str,
) -> None:
    """Add a tier to the active configuration.

    Negative or unparseable numbers become 0, free units are capped at the
    repetition size and unknown multipliers become 1.
    """
    try:
        config = load_active_config(ctx.obj)
        if sequence is None:
            sequence = max((t.sequence for t in config.tiers), default=0) + 1

        tier = normalize_tier(
            {
                "sequence": sequence,
                "units": units,
                "price": price,
                "unitPrice": unit_price,
                "freeUnits": free_units,
                "multiplier": multiplier,
            }
        )
        try:
            updated = config.add_tier(tier)
        except ConfigurationError as e:
            handle_error(e, ExitCode.INVALID_USAGE)
            return

        path = save_active_config(ctx.obj, updated)
        log_info(LogEvent.CLI, "Added tier", sequence=tier.sequence, path=str(path))
        click.echo(f"Added tier {tier.sequence} ({len(updated.tiers)} tiers) -> {path}")

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@tiers.command()
@click.argument("index", type=int)
@click.pass_context
def remove(ctx: click.Context, index: int) -> None:
    """Remove the tier at INDEX (as numbered by 'tiers list')."""
    try:
        config = load_active_config(ctx.obj)
        try:
            updated = config.remove_tier(index - 1)
        except TierNotFoundError as e:
            handle_error(e, ExitCode.TIER_NOT_FOUND)
            return
        except LastTierError as e:
            handle_error(e, ExitCode.INVALID_USAGE)
            return

        path = save_active_config(ctx.obj, updated)
        click.echo(f"Removed tier #{index} ({len(updated.tiers)} tiers) -> {path}")

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@tiers.command(name="set")
@click.argument("index", type=int)
@click.argument("field", type=click.Choice(sorted(EDITABLE_FIELDS), case_sensitive=False))
@click.argument("value", type=str)
@click.pass_context
def set_field(ctx: click.Context, index: int, field: str, value: str) -> None:
    """Set FIELD of the tier at INDEX to VALUE.

    Example: tpv tiers set 3 multiplier infinity
    """
    try:
        config = load_active_config(ctx.obj)
        if not 1 <= index <= len(config.tiers):
            handle_error(
                TierNotFoundError(f"No tier #{index} (configuration has {len(config.tiers)} tiers)", index=index),
                ExitCode.TIER_NOT_FOUND,
            )
            return

        record = tier_to_dict(config.tiers[index - 1])
        record[EDITABLE_FIELDS[field.lower()]] = value
        tier = normalize_tier(record)
        changes = {f.name: getattr(tier, f.name) for f in dataclasses.fields(tier)}

        try:
            updated = config.update_tier(index - 1, **changes)
        except ConfigurationError as e:
            handle_error(e, ExitCode.INVALID_USAGE)
            return

        path = save_active_config(ctx.obj, updated)
        click.echo(f"Updated tier #{index} {field} -> {path}")

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
