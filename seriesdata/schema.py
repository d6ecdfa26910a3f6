"""Schema types for the chart options consumed by the transformation passes.

Options arrive already validated from the dashboard. They are immutable for
the duration of one `update_data` call.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Literal

from .settings import DEFAULT_DATETIME_FORMAT, DEFAULT_NUMBER_FORMAT, DEFAULT_PERCENT_FORMAT, DEFAULT_SORT_X

AxisKey = Literal["x", "y", "y2"]

AxisType = Literal["category", "datetime", "linear", "logarithmic", "log", "-"]


class SeriesFamily(Enum):
    """Closed set of chart families understood by the dispatcher."""

    line = "line"
    area = "area"
    column = "column"
    bar = "bar"
    scatter = "scatter"
    bubble = "bubble"
    box = "box"
    pie = "pie"
    heatmap = "heatmap"
    custom = "custom"

    @classmethod
    def parse(cls, value: object) -> "SeriesFamily | None":
        """Return the family for a tag, or None when the tag is unknown."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class AxisConfig:
    """Axis options relevant to value normalization.

    Args:
        type: Axis kind, or None when the dashboard left it unset.
    """

    type: str | None = None


@dataclass(frozen=True, slots=True)
class SeriesDefaults:
    """Global series toggles.

    Args:
        percent_values: Replace y values by their share of the per-x total.
        stacking: Stack series on top of each other (line/area families).
    """

    percent_values: bool = False
    stacking: bool = False


@dataclass(frozen=True, slots=True)
class SeriesTypeOverride:
    """Per-series overrides keyed by series name in `ChartOptions.series_options`."""

    type: str | None = None
    yaxis: int = 0


@dataclass(frozen=True, slots=True)
class ChartOptions:
    """Chart configuration for a single transform call.

    Args:
        global_series_type: Default chart family tag.
        series_options: Per-series overrides keyed by series name.
        series: Global percent/stacking toggles.
        sort_x: Sort the unified x domain.
        x_axis: X axis configuration.
        y_axis: Primary and optional secondary y axis configuration.
        number_format: numeral-style pattern for y, error and size values.
        percent_format: numeral-style pattern for percent values.
        date_time_format: moment-style pattern for datetime axis values.
        text_format: Label template; empty string selects the default formatter.
    """

    global_series_type: str = "column"
    series_options: dict[str, SeriesTypeOverride] = field(default_factory=dict)
    series: SeriesDefaults = SeriesDefaults()
    sort_x: bool = DEFAULT_SORT_X
    x_axis: AxisConfig = AxisConfig(type="-")
    y_axis: tuple[AxisConfig, ...] = (AxisConfig(type="linear"), AxisConfig(type="linear"))
    number_format: str = DEFAULT_NUMBER_FORMAT
    percent_format: str = DEFAULT_PERCENT_FORMAT
    date_time_format: str = DEFAULT_DATETIME_FORMAT
    text_format: str = ""

    @property
    def family(self) -> SeriesFamily | None:
        """Return the parsed global family (None for unknown tags)."""

        return SeriesFamily.parse(self.global_series_type)

    @property
    def is_pie(self) -> bool:
        """Return True when the chart renders pie slices."""

        return self.family is SeriesFamily.pie

    @property
    def percent_mode(self) -> bool:
        """Return True when percent shares are computed and shown in text."""

        return self.series.percent_values or self.is_pie

    def axis_type(self, axis: str | None) -> str | None:
        """Resolve the configured type of an axis key.

        Args:
            axis: One of `"x"`, `"y"`, `"y2"`; anything else resolves to None.

        Returns:
            Axis type string, or None when the axis is unknown or unset.
        """

        if axis == "x":
            return self.x_axis.type
        if axis == "y":
            return self.y_axis[0].type if len(self.y_axis) > 0 else None
        if axis == "y2":
            return self.y_axis[1].type if len(self.y_axis) > 1 else None
        return None

    def series_family(self, name: str, series_type: str | None = None) -> SeriesFamily | None:
        """Resolve a series family.

        Args:
            name: Series name used to look up `series_options`.
            series_type: Family tag carried by the series itself, if any.

        Returns:
            The override family, else the series' own family, else the global family.
        """

        override = self.series_options.get(name)
        if override is not None and override.type:
            return SeriesFamily.parse(override.type)
        if series_type:
            return SeriesFamily.parse(series_type)
        return self.family

    def series_axis(self, name: str, default: str = "y") -> str:
        """Return the y-axis key for a series (`"y2"` when overridden to the secondary axis)."""

        override = self.series_options.get(name)
        if override is not None and override.yaxis == 1:
            return "y2"
        return default
