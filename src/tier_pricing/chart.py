"""Chart description for a computed curve.

The chart itself is drawn by whatever front end owns it; this module only
describes the three series and the axes, with titles carrying the currency
symbol. The description is a plain value, so callers hold their own chart
state instead of sharing a global instance.
"""

from typing import Any, Dict

from .currency import get_currency
from .models import Curve

CUMULATIVE_LABEL = "Total Cumulative Price"
AVERAGE_LABEL = "Average Unit Price"
MARGINAL_LABEL = "Current Price (Marginal)"


def build_chart_spec(curve: Curve, currency: str = "USD") -> Dict[str, Any]:
    """Describe ``curve`` as a line chart.

    Cumulative values go on the left axis, average and marginal rates share
    the right axis. The marginal series is drawn stepped.

    Args:
        curve: Curve to describe
        currency: Currency code for the axis titles

    Returns:
        Chart description with ``labels``, ``datasets`` and ``axes``
    """
    symbol = get_currency(currency).symbol
    return {
        "type": "line",
        "labels": list(curve.labels),
        "datasets": [
            {
                "label": CUMULATIVE_LABEL,
                "data": list(curve.cumulative),
                "axis": "cumulative",
                "stepped": False,
            },
            {
                "label": AVERAGE_LABEL,
                "data": list(curve.average),
                "axis": "rate",
                "stepped": False,
            },
            {
                "label": MARGINAL_LABEL,
                "data": list(curve.current),
                "axis": "rate",
                "stepped": True,
            },
        ],
        "axes": {
            "x": {"title": "Number of Units"},
            "cumulative": {"title": f"Cumulative Price ({symbol})", "position": "left", "begin_at_zero": True},
            "rate": {"title": f"Unit Price ({symbol})", "position": "right", "begin_at_zero": True},
        },
    }
