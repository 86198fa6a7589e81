"""Common CLI options and decorators."""

from functools import wraps
from typing import Any, Callable, TypeVar, cast

import click

F = TypeVar("F", bound=Callable[..., Any])


def output_option(func: F) -> F:
    """Add --output option to a command."""

    @click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write output to file instead of stdout.")
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return cast(F, wrapper)


def tier_field_options(func: F) -> F:
    """Add the tier field options used when creating a tier."""

    @click.option("--sequence", type=int, default=None, help="Evaluation order. Defaults to after the last tier.")
    @click.option("--units", default="100", show_default=True, help="Units per repetition.")
    @click.option("--price", default="0", show_default=True, help="Fixed fee per repetition.")
    @click.option("--unit-price", default="5", show_default=True, help="Price per billable unit.")
    @click.option("--free-units", default="0", show_default=True, help="Unbilled units at the start of each repetition.")
    @click.option(
        "--multiplier",
        default="1",
        show_default=True,
        help="Repetition count, or 'infinity' / 'inf' / '∞' for an unlimited tier.",
    )
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return cast(F, wrapper)
