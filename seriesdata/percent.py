"""Percent-of-total normalization across series."""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import Decimal

from .dto import Series


def update_percent_values(series_list: Sequence[Series], *, replace_y: bool = True) -> dict[object, float]:
    """Compute each point's share of the absolute total at its x value.

    Only series that actually have a point at a given x contribute to that
    x's total. Division by a zero total is not guarded and yields a non-finite
    value, which the text formatters render as an empty string.

    Args:
        series_list: Visible series, in caller order.
        replace_y: Replace each series' `y` array by its percent values
            (pie charts keep the raw values and only report percents in text).

    Returns:
        Mapping of x value to the absolute total used as denominator.
    """

    totals: dict[object, float] = {}
    for series in series_list:
        for x, point in series.source_data.items():
            value = _as_float(point.y)
            totals[x] = totals.get(x, 0.0) + (0.0 if math.isnan(value) else abs(value))

    for series in series_list:
        values: list[float] = []
        for x, point in series.source_data.items():
            point.y_percent = _divide(_as_float(point.y), totals[x]) * 100
            values.append(point.y_percent)
        if replace_y:
            series.y = values
    return totals


def _as_float(value: object) -> float:
    """Coerce a y value to float; missing or non-numeric values become NaN."""

    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    try:
        return float(str(value))
    except ValueError:
        return math.nan


def _divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: `x / 0` is ±inf and `0 / 0` is NaN."""

    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator
