"""Cumulative stacking for line and area charts."""

from __future__ import annotations

from collections.abc import Sequence

from .dto import Series


def accumulate_stacked_values(series_list: Sequence[Series]) -> None:
    """Stack each series on top of the previous one.

    Series must already share one x domain with a zero filler. The first
    series is left as is; every later series becomes `previous.y[i] + y[i]`,
    where `previous` is the already-stacked preceding series. A missing (None)
    value adds as zero.

    Args:
        series_list: Aligned visible series, in caller order.
    """

    previous: Series | None = None
    for series in series_list:
        if previous is not None:
            series.y = [_add(prev, current) for prev, current in zip(previous.y, series.y)]
        previous = series


def _add(left: object, right: object) -> float:
    """Add two stack values, treating None as zero."""

    return (0 if left is None else left) + (0 if right is None else right)  # type: ignore[operator]
