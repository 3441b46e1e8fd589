from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable


def format_axis_value(value: float) -> str:
    """Format an axis bound: grouped integers below 1000, thousands with a `K` suffix above.

    >>> format_axis_value(999), format_axis_value(1000), format_axis_value(1500)
    ('999', '1.0K', '1.5K')
    """

    if value < 1000:
        return _group(value, decimals=0)
    return _group(value / 1000.0, decimals=1) + "K"


def truncate_label(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """Shorten `text` to 3 characters, then to 1, while it is wider than `max_width`.

    A single character that still overflows is returned as is.
    """

    if measure(text) <= max_width:
        return text
    text = text[:3]
    if measure(text) <= max_width:
        return text
    return text[:1]


def _group(value: float, *, decimals: int) -> str:
    quant = Decimal("1").scaleb(-decimals)
    q = Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP)
    if q == 0:
        q = abs(q)
    return f"{q:,}"
