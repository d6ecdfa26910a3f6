"""Shared x-axis domain for aligning series positionally.

Stacked and grouped category charts need every series to expose the same x
values in the same order. The shared domain is the union of all series keys
in first-seen order (series in caller order, points in arrival order), sorted
only on request.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from .axis_values import parse_timestamp
from .dto import ErrorBars, Series
from .schema import ChartOptions


def natural_sort_key(value: object) -> tuple[int, object]:
    """Return a sort key that orders mixed values without raising.

    Numbers sort first, then timestamps, then strings, then anything else by
    its string form. NaN and None sort last.
    """

    if value is None:
        return (5, "")
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, Decimal):
        return (4, "") if value.is_nan() else (0, value)
    if isinstance(value, int):
        return (0, value)
    if isinstance(value, float):
        return (4, "") if math.isnan(value) else (0, value)
    if isinstance(value, (datetime, date)):
        parsed = parse_timestamp(value)
        return (1, parsed.timestamp()) if parsed is not None else (3, str(value))
    if isinstance(value, str):
        return (2, value)
    return (3, str(value))


def get_unified_x_values(series_list: Sequence[Series], *, sorted_: bool = False) -> list[object]:
    """Return the ordered union of x values across series.

    Args:
        series_list: Visible series, in caller order.
        sorted_: Sort the union by `natural_sort_key` (stable).

    Returns:
        List of unique x values.
    """

    # dict keeps insertion order and gives O(1) membership.
    seen: dict[object, None] = {}
    for series in series_list:
        for x in series.source_data:
            seen.setdefault(x, None)

    result = list(seen)
    if sorted_:
        result.sort(key=natural_sort_key)
    return result


def update_unified_x_values(
    series_list: Sequence[Series],
    options: ChartOptions,
    *,
    default_y: float | None = None,
) -> list[object]:
    """Re-project every series onto the shared x domain.

    Args:
        series_list: Visible series to rebuild in place.
        options: Chart options (`sort_x`, percent mode).
        default_y: Filler y for x values a series lacks (0 when stacking).

    Returns:
        The shared x domain used for every series.
    """

    unified_x = get_unified_x_values(series_list, sorted_=options.sort_x)
    use_percent = options.series.percent_values
    for series in series_list:
        xs: list[object] = []
        ys: list[object] = []
        errors: list[float | None] = []
        for x in unified_x:
            xs.append(x)
            point = series.source_data.get(x)
            if point is None:
                ys.append(default_y)
                errors.append(None)
                continue
            ys.append(point.y_percent if use_percent else point.y)
            errors.append(point.y_error)
        series.x = xs
        series.y = ys
        series.error_y = ErrorBars(array=errors, visible=series.error_y.visible)
    return unified_x


def project_series_values(series: Series, options: ChartOptions) -> None:
    """Rebuild a series' own x/y/error arrays from its source points.

    Used when the series keeps its own x domain, so output arrays always
    follow the arrival order of the source points.
    """

    use_percent = options.series.percent_values
    points = list(series.source_data.items())
    series.x = [x for x, _ in points]
    series.y = [point.y_percent if use_percent else point.y for _, point in points]
    series.error_y = ErrorBars(
        array=[point.y_error for _, point in points],
        visible=series.error_y.visible,
    )
