"""Curve and chart commands for the TPV CLI."""

import csv
import io
import sys
from typing import Optional, TextIO

import click
import yaml

from ...chart import build_chart_spec
from ...engine import calculate
from ...errors import ConfigurationError
from ..formatters import create_console, format_curve_json, format_curve_table, format_json
from ..utils import ExitCode, handle_error, load_active_config, output_option, validate_format_support


def _write_text(text: str, output_file: Optional[TextIO]) -> None:
    if output_file:
        output_file.write(text + "\n")
    else:
        click.echo(text)


@click.command()
@output_option
@click.pass_context
def curve(ctx: click.Context, output: Optional[str] = None) -> None:
    """Compute the cost curve of the active configuration.

    Prints one row per breakpoint: consumed units, cumulative price,
    average unit price and marginal price.
    """
    try:
        config = load_active_config(ctx.obj)
        result = calculate(config)
        format_type = ctx.obj["format"]

        output_file: Optional[TextIO] = None
        if output:
            output_file = open(output, "w", encoding="utf-8")

        try:
            if format_type == "json":
                format_json(format_curve_json(result, config), output_file or sys.stdout)
            elif format_type == "yaml":
                payload = format_curve_json(result, config)
                _write_text(yaml.safe_dump(payload, default_flow_style=False, sort_keys=True).rstrip(), output_file)
            elif format_type == "csv":
                buffer = io.StringIO()
                writer = csv.writer(buffer)
                writer.writerow(["units", "cumulative", "average", "current"])
                for point in result.points():
                    average = "" if point.average is None else point.average
                    writer.writerow([point.label, point.cumulative, average, point.current])
                _write_text(buffer.getvalue().strip(), output_file)
            else:
                console = create_console(output=output_file, no_color=ctx.obj["no_color"] or output_file is not None)
                format_curve_table(result, config.currency, console)
        finally:
            if output_file:
                output_file.close()

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@click.command()
@output_option
@click.pass_context
def chart(ctx: click.Context, output: Optional[str] = None) -> None:
    """Print the chart description (series and axes) of the cost curve."""
    # Only JSON describes a chart; table/csv fall back to it
    try:
        validate_format_support(ctx.obj["format"], ["json"], "chart", ctx.obj)
    except click.BadParameter as e:
        handle_error(e, ExitCode.INVALID_USAGE)
        return

    try:
        config = load_active_config(ctx.obj)
        spec = build_chart_spec(calculate(config), config.currency)

        if output:
            with open(output, "w", encoding="utf-8") as f:
                format_json(spec, f)
        else:
            format_json(spec)

    except ConfigurationError as e:
        handle_error(e, ExitCode.CONFIG_SOURCE_ERROR)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
