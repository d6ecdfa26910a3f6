"""Pytest fixtures shared across the series transformation tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from seriesdata.dto import Point, Series


@pytest.fixture
def make_series() -> Callable[..., Series]:
    """Return a factory building a Series from `(x, y)` pairs or Points."""

    def _make(name: str, points: Sequence[tuple[Any, Any] | Point], **kwargs: Any) -> Series:
        built = [p if isinstance(p, Point) else Point(x=p[0], y=p[1], row={"x": p[0], "y": p[1]}) for p in points]
        return Series.from_points(name, built, **kwargs)

    return _make


SPEED_MARKERS = ("unit", "integration")


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Require exactly one speed marker per test.

    `unit` tests exercise a single pass on in-memory series. `integration`
    tests run the whole pipeline from an options file on disk.
    """

    offending: list[str] = []
    for item in items:
        present = [name for name in SPEED_MARKERS if item.get_closest_marker(name) is not None]
        if len(present) != 1:
            offending.append(f"- {item.nodeid} (markers={present or 'none'})")

    if offending:
        raise pytest.UsageError(
            "Tests need exactly one of `@pytest.mark.unit` / `@pytest.mark.integration`:\n"
            + "\n".join(offending)
        )
