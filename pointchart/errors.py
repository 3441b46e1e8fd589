from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when chart entries or chart configuration cannot be laid out."""
