"""End-to-end runs: options loaded from YAML, then the full series transform."""

from __future__ import annotations

from pathlib import Path

import pytest

from seriesdata import update_data
from seriesdata.dto import Point, Series
from seriesdata.options_codec import load_chart_options

pytestmark = pytest.mark.integration


def test_stacked_percent_area_chart_from_yaml(tmp_path: Path, make_series) -> None:  # type: ignore[no-untyped-def]
    """A stored stacked-percent area config drives alignment, stacking and labels."""

    path = tmp_path / "chart.yml"
    path.write_text(
        "globalSeriesType: area\n"
        "sortX: true\n"
        "xAxis: {type: category}\n"
        "series: {percentValues: true, stacking: stack}\n"
        "numberFormat: '0,0'\n"
        "percentFormat: '0%'\n",
        encoding="utf-8",
    )
    options = load_chart_options(path)

    a = make_series("A", [("b", 1), ("a", 1)])
    b = make_series("B", [("a", 3)])
    hidden = make_series("H", [("a", 100)], visible=False)
    update_data([a, b, hidden], options)

    assert a.x == b.x == ["a", "b"]
    assert a.y == [25.0, 100.0]
    assert b.y == [100.0, 100.0]
    assert a.text == ["25% (1)", "100% (1)"]
    assert b.text == ["75% (3)", ""]
    assert hidden.text == []


def test_series_type_and_template_from_yaml(tmp_path: Path) -> None:
    """A loader-tagged scatter series renders its raw y through the datetime axis."""

    path = tmp_path / "chart.yml"
    path.write_text(
        "globalSeriesType: column\n"
        "yAxis: [{type: datetime}]\n"
        "dateTimeFormat: 'YYYY-MM-DD'\n"
        "textFormat: '{{ @@name }} {{ @@y }} {{ city }}'\n",
        encoding="utf-8",
    )
    options = load_chart_options(path)

    series = Series.from_points(
        "S",
        [Point(x=1, y=7, row={"x": 1, "y": "2024-01-02T00:00:00", "$raw": {"city": "Oslo"}})],
        type="scatter",
    )
    update_data([series], options)

    assert series.text == ["S 2024-01-02 Oslo"]
    assert series.hover == series.text
