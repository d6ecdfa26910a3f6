"""Unit tests for cumulative stacking."""

from __future__ import annotations

import pytest

from seriesdata.dto import Series
from seriesdata.stacking import accumulate_stacked_values

pytestmark = pytest.mark.unit


def test_each_series_stacks_on_the_previous_one() -> None:
    """Stacked values accumulate in caller order."""

    a = Series(name="A", y=[1, 2])
    b = Series(name="B", y=[3, 4])
    c = Series(name="C", y=[10, 20])
    accumulate_stacked_values([a, b, c])
    assert a.y == [1, 2]
    assert b.y == [4, 6]
    assert c.y == [14, 26]


def test_missing_values_add_as_zero() -> None:
    """None entries contribute nothing to the stack."""

    a = Series(name="A", y=[None, 2])
    b = Series(name="B", y=[3, None])
    accumulate_stacked_values([a, b])
    assert b.y == [3, 2]


def test_single_series_is_untouched() -> None:
    """A lone series is already its own stack."""

    a = Series(name="A", y=[5, 6])
    accumulate_stacked_values([a])
    assert a.y == [5, 6]
