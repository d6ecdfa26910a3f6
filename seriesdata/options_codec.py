"""Encoding/decoding helpers for dashboard chart options payloads.

The dashboard stores chart options as camelCase JSON. Decoding is
best-effort: missing fields take the package defaults and malformed scalar
values fall back to defaults with a warning. Only a payload that is not a
mapping at all (or a file that is not valid YAML/JSON) is rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

import yaml

from .errors import ChartOptionsError
from .schema import AxisConfig, ChartOptions, SeriesDefaults, SeriesTypeOverride

logger = logging.getLogger(__name__)

_DEFAULTS = ChartOptions()


def decode_chart_options(payload: Mapping[str, Any]) -> ChartOptions:
    """Decode a ChartOptions instance from a dashboard payload.

    Args:
        payload: camelCase options mapping (`globalSeriesType`, `seriesOptions`,
            `series`, `sortX`, `xAxis`, `yAxis`, `numberFormat`, `percentFormat`,
            `dateTimeFormat`, `textFormat`).

    Returns:
        ChartOptions instance.

    Raises:
        ChartOptionsError: When `payload` is not a mapping.
    """

    if not isinstance(payload, Mapping):
        raise ChartOptionsError(f"Chart options must be a mapping, got {type(payload).__name__}.")

    series_raw = _mapping(payload.get("series"), field="series")
    series = SeriesDefaults(
        percent_values=_parse_bool(series_raw.get("percentValues"), default=False, field="series.percentValues"),
        stacking=_parse_stacking(series_raw.get("stacking")),
    )

    series_options: dict[str, SeriesTypeOverride] = {}
    for name, raw in _mapping(payload.get("seriesOptions"), field="seriesOptions").items():
        entry = _mapping(raw, field=f"seriesOptions.{name}")
        series_options[str(name)] = SeriesTypeOverride(
            type=_parse_str(entry.get("type")),
            yaxis=_parse_int(entry.get("yAxis"), default=0, field=f"seriesOptions.{name}.yAxis"),
        )

    x_axis = AxisConfig(type=_parse_str(_mapping(payload.get("xAxis"), field="xAxis").get("type")))
    y_axis_raw = payload.get("yAxis")
    if isinstance(y_axis_raw, list):
        y_axis = tuple(
            AxisConfig(type=_parse_str(_mapping(axis, field=f"yAxis[{idx}]").get("type")))
            for idx, axis in enumerate(y_axis_raw)
        )
    else:
        y_axis = _DEFAULTS.y_axis

    return ChartOptions(
        global_series_type=_parse_str(payload.get("globalSeriesType")) or _DEFAULTS.global_series_type,
        series_options=series_options,
        series=series,
        sort_x=_parse_bool(payload.get("sortX"), default=_DEFAULTS.sort_x, field="sortX"),
        x_axis=x_axis if "xAxis" in payload else _DEFAULTS.x_axis,
        y_axis=y_axis,
        number_format=_parse_format(payload.get("numberFormat"), default=_DEFAULTS.number_format),
        percent_format=_parse_format(payload.get("percentFormat"), default=_DEFAULTS.percent_format),
        date_time_format=_parse_format(payload.get("dateTimeFormat"), default=_DEFAULTS.date_time_format),
        text_format=_parse_format(payload.get("textFormat"), default=""),
    )


def encode_chart_options(options: ChartOptions) -> dict[str, Any]:
    """Encode ChartOptions into a JSON-serializable camelCase dictionary.

    Args:
        options: ChartOptions to encode.

    Returns:
        Payload accepted by `decode_chart_options`.
    """

    return {
        "globalSeriesType": options.global_series_type,
        "seriesOptions": {
            name: {"type": override.type, "yAxis": override.yaxis}
            for name, override in options.series_options.items()
        },
        "series": {
            "percentValues": options.series.percent_values,
            "stacking": "stack" if options.series.stacking else None,
        },
        "sortX": options.sort_x,
        "xAxis": {"type": options.x_axis.type},
        "yAxis": [{"type": axis.type} for axis in options.y_axis],
        "numberFormat": options.number_format,
        "percentFormat": options.percent_format,
        "dateTimeFormat": options.date_time_format,
        "textFormat": options.text_format,
    }


def load_chart_options(path: str | Path) -> ChartOptions:
    """Load chart options from a YAML (or JSON) file.

    Args:
        path: File path.

    Returns:
        ChartOptions instance; an empty file yields the defaults.

    Raises:
        ChartOptionsError: When the file cannot be parsed or is not a mapping.
    """

    source = str(path)
    raw = Path(path).read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ChartOptionsError(f"Invalid YAML: {exc}", source=source) from exc
    if not isinstance(payload, Mapping):
        raise ChartOptionsError("Chart options file must contain a mapping.", source=source)
    return decode_chart_options(cast(Mapping[str, Any], payload))


def _mapping(value: object, *, field: str) -> Mapping[str, Any]:
    """Return `value` when it is a mapping, otherwise an empty mapping."""

    if value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    logger.warning("Ignoring non-mapping chart option %s=%r", field, value)
    return {}


def _parse_str(value: object) -> str | None:
    """Best-effort optional string parsing."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_format(value: object, *, default: str) -> str:
    """Format strings keep surrounding whitespace; None selects the default."""

    if value is None:
        return default
    return str(value)


def _parse_bool(value: object, *, default: bool, field: str) -> bool:
    """Best-effort bool parsing for option payloads."""

    if isinstance(value, bool):
        return value
    if value is None:
        return default
    normalized = str(value).strip().casefold()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off", ""}:
        return False
    logger.warning("Unrecognized boolean for chart option %s=%r; using %s", field, value, default)
    return default


def _parse_stacking(value: object) -> bool:
    """Stacking is stored as a mode string (`"stack"`) or a boolean."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().casefold() not in {"", "0", "false", "no", "off", "none", "null"}


def _parse_int(value: object, *, default: int, field: str) -> int:
    """Best-effort int parsing for option payloads."""

    if value is None or value == "":
        return default
    try:
        return int(str(value))
    except ValueError:
        logger.warning("Unrecognized integer for chart option %s=%r; using %s", field, value, default)
        return default
