"""Currency listing command for the TPV CLI."""

import click

from ...currency import CURRENCIES
from ..formatters import create_console, format_currencies_json, format_currencies_table, format_json
from ..utils import ExitCode, handle_error, load_active_config


@click.command()
@click.pass_context
def currencies(ctx: click.Context) -> None:
    """List supported currencies and mark the active one."""
    try:
        current = load_active_config(ctx.obj).currency
        format_type = ctx.obj["format"]

        if format_type == "json":
            format_json(format_currencies_json(list(CURRENCIES), current))
        elif format_type == "table":
            console = create_console(no_color=ctx.obj["no_color"])
            format_currencies_table(list(CURRENCIES), current, console)
        else:
            handle_error(
                click.BadParameter(f"Format '{format_type}' is not supported for currencies. Use 'table' or 'json'."),
                ExitCode.INVALID_USAGE,
            )

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
