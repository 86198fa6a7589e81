"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...constraints import format_multiplier
from ...currency import Currency, format_amount
from ...models import Curve, PricingConfig


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    # Let Rich use the actual terminal width to avoid truncating headers
    return Console(file=output, no_color=no_color)


def _format_units(value: float) -> str:
    """Render a unit count without a trailing '.0'."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_curve_table(curve: Curve, currency: str, console: Optional[Console] = None) -> None:
    """Format a curve as a Rich table.

    Args:
        curve: Computed curve
        currency: Currency code for amounts
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Pricing Curve", show_header=True, header_style="bold magenta")

    table.add_column("Units", style="cyan", justify="right", no_wrap=True)
    table.add_column("Cumulative", justify="right", no_wrap=True)
    table.add_column("Average", justify="right", no_wrap=True)
    table.add_column("Marginal", justify="right", no_wrap=True)

    for point in curve.points():
        average = "N/A" if point.average is None else format_amount(point.average, currency)
        table.add_row(
            _format_units(point.label),
            format_amount(point.cumulative, currency),
            average,
            format_amount(point.current, currency),
        )

    console.print(table)


def format_tiers_table(config: PricingConfig, console: Optional[Console] = None) -> None:
    """Format the tiers of a configuration as a Rich table.

    Args:
        config: Configuration
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Pricing Tiers", show_header=True, header_style="bold magenta")

    table.add_column("#", style="dim", justify="right")
    table.add_column("Seq", style="cyan", justify="right")
    table.add_column("Units", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Unit\nPrice", justify="right")
    table.add_column("Free\nUnits", justify="right")
    table.add_column("Mult", justify="center")

    for index, tier in enumerate(config.tiers, start=1):
        table.add_row(
            str(index),
            str(tier.sequence),
            _format_units(tier.units),
            format_amount(tier.price, config.currency),
            format_amount(tier.unit_price, config.currency),
            _format_units(tier.free_units),
            format_multiplier(tier.multiplier),
        )

    console.print(table)


def format_config_summary(config: PricingConfig, console: Optional[Console] = None) -> None:
    """Print currency, floor and discount of a configuration.

    Args:
        config: Configuration
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    console.print(f"[bold]Currency:[/bold] {config.currency}")
    console.print(f"[bold]MRR:[/bold] {format_amount(config.mrr, config.currency)}")
    console.print(f"[bold]Discount:[/bold] {config.discount:g}%")
    console.print()


def format_currencies_table(currencies: List[Currency], current: str, console: Optional[Console] = None) -> None:
    """Format the currency table as a Rich table.

    Args:
        currencies: Supported currencies
        current: Code of the active currency
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Currencies", show_header=True, header_style="bold magenta")

    table.add_column("Code", style="cyan")
    table.add_column("Symbol", justify="center")
    table.add_column("Status", justify="center")

    for currency in currencies:
        is_current = currency.code == current
        status = "✓ Active" if is_current else ""
        style = "bold green" if is_current else ""
        table.add_row(currency.code, currency.symbol, status, style=style)

    console.print(table)


def format_paths_table(paths: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Format configuration paths as a Rich table.

    Args:
        paths: Path information
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Configuration Paths", show_header=True, header_style="bold magenta")

    table.add_column("Item", style="cyan")
    table.add_column("Value", style="yellow")
    table.add_column("Exists", justify="center")

    for item, info in paths.items():
        value = info.get("value")
        exists = info.get("exists")
        if exists is None:
            status = Text("N/A", style="dim")
        else:
            status = Text("✓" if exists else "✗", style="green" if exists else "red")
        display_value = str(value) if value is not None else "[dim]<not set>[/dim]"
        table.add_row(item, display_value, status)

    console.print(table)
