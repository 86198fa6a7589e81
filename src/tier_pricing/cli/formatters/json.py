"""JSON output formatter for CLI."""

import json
import sys
from enum import Enum as _Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from ...constraints import format_multiplier
from ...currency import Currency
from ...models import Curve, PricingConfig
from ...serialization import config_to_dict


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - Path -> string
    - Enum -> value (fallback to name)
    - Fallback -> str(obj)
    """
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=True,
        default=_default_serializer,
    )
    output.write("\n")


def format_curve_json(curve: Curve, config: PricingConfig) -> Dict[str, Any]:
    """Format a curve for JSON output.

    Args:
        curve: Computed curve
        config: Configuration the curve was computed from

    Returns:
        Formatted data structure
    """
    points = [
        {
            "units": point.label,
            "cumulative": point.cumulative,
            "average": point.average,
            "current": point.current,
        }
        for point in curve.points()
    ]
    return {
        "currency": config.currency,
        "mrr": config.mrr,
        "discount": config.discount,
        "points": points,
        "count": len(points),
    }


def format_tiers_json(config: PricingConfig) -> Dict[str, Any]:
    """Format the tiers of a configuration for JSON output.

    Args:
        config: Configuration

    Returns:
        Formatted data structure
    """
    tiers = config_to_dict(config)["tiers"]
    for index, (record, tier) in enumerate(zip(tiers, config.tiers), start=1):
        record["index"] = index
        record["multiplierDisplay"] = format_multiplier(tier.multiplier)
    return {"tiers": tiers, "count": len(tiers)}


def format_currencies_json(currencies: List[Currency], current: str) -> Dict[str, Any]:
    """Format the currency table for JSON output.

    Args:
        currencies: Supported currencies
        current: Code of the active currency

    Returns:
        Formatted data structure
    """
    return {
        "currencies": [{"code": c.code, "symbol": c.symbol} for c in currencies],
        "current": current,
        "count": len(currencies),
    }


def format_paths_json(paths: Dict[str, Any]) -> Dict[str, Any]:
    """Format configuration paths for JSON output.

    Args:
        paths: Path information

    Returns:
        Formatted data structure
    """
    return {
        "config": paths,
        "resolution_order": [
            "--config flag",
            "TPV_CONFIG_PATH environment variable",
            "User config file",
            "Built-in defaults",
        ],
    }
