"""Top-level series transformation entry point.

`update_data` receives the series built by the query-result loader plus the
chart options and annotates every visible series in place. The pipeline is
picked once per call from the chart family:

- pie: percent shares (always), then text.
- line/area: optional percents, then either stacking over a zero-filled
  shared x domain or, for sorted category axes, a null-filled shared domain;
  text last.
- heatmap: untouched; the loader already shapes heatmap traces.
- anything else (including unknown families): optional percents, then the
  null-filled shared domain for sorted category axes unless stacking; text
  last.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .dto import ErrorBars, Series
from .percent import update_percent_values
from .schema import ChartOptions, SeriesFamily
from .stacking import accumulate_stacked_values
from .text_format import update_series_text
from .unified_axis import project_series_values, update_unified_x_values

logger = logging.getLogger(__name__)

LINE_AREA_FAMILIES = frozenset({SeriesFamily.line, SeriesFamily.area})


def update_data(series_list: list[Series], options: ChartOptions) -> list[Series]:
    """Transform series data into renderer-ready arrays.

    Args:
        series_list: Series produced by the loader. Hidden series are returned
            untouched and never contribute to percents or the shared x domain.
        options: Chart options for this call.

    Returns:
        The same list, with visible series annotated in place.
    """

    visible = [series for series in series_list if series.visible is True]
    if not visible:
        return series_list

    family = options.family
    logger.debug(
        "Transforming %d of %d series as %s",
        len(visible),
        len(series_list),
        family.value if family is not None else f"default ({options.global_series_type!r})",
    )

    if family is SeriesFamily.pie:
        _update_pie_data(visible, options)
    elif family in LINE_AREA_FAMILIES:
        _update_line_area_data(visible, options)
    elif family is SeriesFamily.heatmap:
        pass
    else:
        _update_default_data(visible, options)
    return series_list


def _update_pie_data(series_list: Sequence[Series], options: ChartOptions) -> None:
    """Pie slices keep raw values; percents only feed the label text."""

    update_percent_values(series_list, replace_y=False)
    for series in series_list:
        series.labels = list(series.source_data.keys())
        series.y = [point.y for point in series.source_data.values()]
        series.error_y = ErrorBars(
            array=[point.y_error for point in series.source_data.values()],
            visible=series.error_y.visible,
        )
    update_series_text(series_list, options)


def _update_line_area_data(series_list: Sequence[Series], options: ChartOptions) -> None:
    """Line and area charts may stack series on a zero-filled shared domain."""

    _apply_percent_values(series_list, options)
    if options.series.stacking:
        update_unified_x_values(series_list, options, default_y=0)
        accumulate_stacked_values(series_list)
    elif _use_unified_x_axis(options):
        update_unified_x_values(series_list, options)
    else:
        _project_each(series_list, options)
    update_series_text(series_list, options)


def _update_default_data(series_list: Sequence[Series], options: ChartOptions) -> None:
    """Bar, scatter, bubble, box and unknown families."""

    _apply_percent_values(series_list, options)
    if not options.series.stacking and _use_unified_x_axis(options):
        update_unified_x_values(series_list, options)
    else:
        _project_each(series_list, options)
    update_series_text(series_list, options)


def _apply_percent_values(series_list: Sequence[Series], options: ChartOptions) -> None:
    """Run the percent pass when percent mode is enabled."""

    if options.series.percent_values:
        update_percent_values(series_list)


def _project_each(series_list: Sequence[Series], options: ChartOptions) -> None:
    """Rebuild each series' arrays from its own source points."""

    for series in series_list:
        project_series_values(series, options)


def _use_unified_x_axis(options: ChartOptions) -> bool:
    """Sorted category axes align series on a shared domain (box plots excepted)."""

    return options.sort_x and options.x_axis.type == "category" and options.family is not SeriesFamily.box
