"""Unit tests for percent-of-total normalization."""

from __future__ import annotations

import math

import pytest

from seriesdata.percent import update_percent_values

pytestmark = pytest.mark.unit


def test_only_series_with_the_x_contribute_to_the_total(make_series) -> None:  # type: ignore[no-untyped-def]
    """Series lacking an x do not add to that x's denominator."""

    a = make_series("A", [("a", 1), ("b", 1)])
    b = make_series("B", [("a", 3)])
    totals = update_percent_values([a, b])

    assert totals == {"a": 4.0, "b": 1.0}
    assert a.y == [25.0, 100.0]
    assert b.y == [75.0]
    assert a.source_data["a"].y_percent == 25.0


def test_negative_values_use_absolute_totals(make_series) -> None:  # type: ignore[no-untyped-def]
    """Totals sum absolute values; the sign of each share is kept."""

    a = make_series("A", [("a", -1)])
    b = make_series("B", [("a", 3)])
    update_percent_values([a, b])
    assert a.y == [-25.0]
    assert b.y == [75.0]


def test_zero_total_produces_nan(make_series) -> None:  # type: ignore[no-untyped-def]
    """A zero denominator is not guarded and yields a non-finite share."""

    a = make_series("A", [("a", 0)])
    b = make_series("B", [("a", 0)])
    update_percent_values([a, b])
    assert math.isnan(a.y[0])
    assert math.isnan(b.source_data["a"].y_percent)


def test_keep_y_for_pie(make_series) -> None:  # type: ignore[no-untyped-def]
    """With `replace_y=False` only the points are annotated."""

    a = make_series("A", [("a", 30)])
    b = make_series("B", [("a", 70)])
    update_percent_values([a, b], replace_y=False)
    assert a.y == [30]
    assert a.source_data["a"].y_percent == pytest.approx(30.0)
    assert b.source_data["a"].y_percent == pytest.approx(70.0)


def test_shares_sum_to_100_per_x(make_series) -> None:  # type: ignore[no-untyped-def]
    """Shares of every x add up to 100 across the series that have it."""

    series = [
        make_series("A", [("a", 1.5), ("b", 2), ("c", 7)]),
        make_series("B", [("b", 5), ("a", 3.25)]),
        make_series("C", [("c", 1), ("a", 9)]),
    ]
    update_percent_values(series)
    for x in ("a", "b", "c"):
        total = sum(s.source_data[x].y_percent for s in series if x in s.source_data)
        assert total == pytest.approx(100.0)
