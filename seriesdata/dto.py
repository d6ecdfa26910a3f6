"""Data containers shared by the series transformation passes.

`Series` and `Point` are built by the query-result loader before any pass in
this package runs. The passes only annotate them: `Point.y_percent` and the
per-series output arrays. `Series.source_data` is an insertion-ordered dict
and its key order is part of the contract.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from typing import Any


@dataclass(slots=True)
class Point:
    """A single (x, y) observation inside a series.

    Attributes:
        x: Semantic x value, also the key in `Series.source_data`.
        y: Observed value paired with `x`.
        y_error: Optional error bar value.
        size: Optional bubble size.
        y_percent: Share of the cross-series total at `x`, set by the percent pass.
        row: Original record. Its `"$raw"` entry holds unprocessed fields.
    """

    x: Any
    y: Any
    y_error: float | None = None
    size: float | None = None
    y_percent: float | None = None
    row: dict[str, Any] = field(default_factory=dict)

    @property
    def raw(self) -> dict[str, Any]:
        """Return the unprocessed record fields (empty when the loader kept none)."""

        return self.row.get("$raw") or {}


@dataclass(slots=True)
class ErrorBars:
    """Error bar payload mirroring the renderer's `error_y` shape."""

    array: list[float | None] = field(default_factory=list)
    visible: bool = True


@dataclass(slots=True)
class Series:
    """One chart trace and its output arrays.

    Attributes:
        name: Display label, unique within a chart.
        type: Optional per-trace family tag; falls back to the global family.
        visible: Hidden series are ignored by every pass.
        yaxis: Axis key the trace is plotted on (`"y"` or `"y2"`).
        source_data: Ordered mapping of x value to Point.
        x: Output x values (non-pie families).
        y: Output y values.
        error_y: Output error bars aligned to `x`.
        labels: Output slice labels (pie only).
        text: Output label text aligned to `x` (or `labels`).
        hover: Output hover text aligned to `text`.
    """

    name: str
    type: str | None = None
    visible: bool = True
    yaxis: str = "y"
    source_data: dict[Any, Point] = field(default_factory=dict)
    x: list[Any] = field(default_factory=list)
    y: list[Any] = field(default_factory=list)
    error_y: ErrorBars = field(default_factory=ErrorBars)
    labels: list[Any] = field(default_factory=list)
    text: list[str] = field(default_factory=list)
    hover: list[str] = field(default_factory=list)

    @classmethod
    def from_points(cls, name: str, points: Iterable[Point], **kwargs: Any) -> "Series":
        """Build a series whose `source_data` follows the order of `points`.

        Args:
            name: Series display label.
            points: Points in arrival order. A repeated x replaces the earlier
                point but keeps its original position.
            **kwargs: Extra `Series` fields (type, visible, yaxis).

        Returns:
            Series with `source_data` populated and its own x/y arrays filled
            in arrival order.
        """

        source_data: dict[Any, Point] = {}
        for point in points:
            source_data[point.x] = point
        series = cls(name=name, source_data=source_data, **kwargs)
        series.x = list(source_data.keys())
        series.y = [point.y for point in source_data.values()]
        series.error_y = ErrorBars(array=[point.y_error for point in source_data.values()])
        return series
