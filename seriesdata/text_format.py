"""Label text rendering for series points.

Each point gets a token bag mapping token names to pre-formatted strings:
`@@name`, `@@x`, `@@y`, and when available `@@yError`, `@@size`,
`@@yPercent`, plus every raw field of the original record. The bag is either
substituted into the user template or handed to the default formatter of the
chart family. Template rendering is a pure lookup; no number formatting
happens here.

Unrecognized template tokens are left in the output literally.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Final

from .axis_values import format_axis_value
from .dto import Series
from .number_format import NumberFormatter, create_number_formatter
from .schema import ChartOptions, SeriesFamily

logger = logging.getLogger(__name__)

TokenBag = dict[str, str]
TextFormatter = Callable[[Mapping[str, str]], str]

_BRACED_TOKEN_RE: Final = re.compile(r"\{\{\s*([^\s{}]+?)\s*\}\}")
_BARE_TOKEN_RE: Final = re.compile(r"@@\w+")

ANY_Y_FAMILIES: Final[frozenset[SeriesFamily]] = frozenset({SeriesFamily.bubble, SeriesFamily.scatter})


def format_simple_template(template: str, tokens: Mapping[str, object]) -> str:
    """Substitute tokens into a template string.

    Args:
        template: Template text. `{{ key }}` addresses any token, including raw
            record fields by their original name; `@@key` addresses built-in
            tokens directly.
        tokens: Token bag of already formatted values.

    Returns:
        Rendered string. Tokens missing from the bag (or set to None) are kept
        literally.
    """

    def _lookup(key: str, original: str) -> str:
        value = tokens.get(key)
        if value is None:
            return original
        return str(value)

    # Substituted values are final; bare markers are only scanned in literal segments.
    pieces: list[str] = []
    cursor = 0
    for match in _BRACED_TOKEN_RE.finditer(template):
        pieces.append(_substitute_bare(template[cursor : match.start()], tokens))
        pieces.append(_lookup(match.group(1), match.group(0)))
        cursor = match.end()
    pieces.append(_substitute_bare(template[cursor:], tokens))
    return "".join(pieces)


def _substitute_bare(segment: str, tokens: Mapping[str, object]) -> str:
    """Replace bare `@@token` markers in a literal template segment."""

    def _replace(match: re.Match[str]) -> str:
        value = tokens.get(match.group(0))
        return match.group(0) if value is None else str(value)

    return _BARE_TOKEN_RE.sub(_replace, segment)


def default_format_series_text(item: Mapping[str, str]) -> str:
    """Default label: y, then ± error, then percent wrap, then `: size`."""

    result = item.get("@@y", "")
    if item.get("@@yError") is not None:
        result = f"{result} ± {item['@@yError']}"
    if item.get("@@yPercent") is not None:
        result = f"{item['@@yPercent']} ({result})"
    if item.get("@@size") is not None:
        result = f"{result}: {item['@@size']}"
    return result


def default_format_series_text_for_pie(item: Mapping[str, str]) -> str:
    """Default pie label: `<percent> (<value>)`."""

    return f"{item.get('@@yPercent', '')} ({item.get('@@y', '')})"


def create_text_formatter(options: ChartOptions) -> TextFormatter:
    """Select the text formatter for a chart.

    Args:
        options: Chart options; an empty `text_format` selects the family default.

    Returns:
        Callable rendering a token bag into label text.
    """

    if options.text_format == "":
        return default_format_series_text_for_pie if options.is_pie else default_format_series_text
    template = options.text_format
    return lambda item: format_simple_template(template, item)


def build_token_bag(
    series: Series,
    x: object,
    *,
    options: ChartOptions,
    format_number: NumberFormatter,
    format_percent: NumberFormatter,
) -> TokenBag:
    """Build the token bag for one slot of a series.

    Args:
        series: Series owning the slot.
        x: X value (or pie label) of the slot.
        options: Chart options.
        format_number: Formatter for y, error and size values.
        format_percent: Formatter for percent values.

    Returns:
        Token bag. Slots without a source point (filled during x-axis
        unification) only carry `@@name`.
    """

    bag: TokenBag = {"@@name": series.name}
    point = series.source_data.get(x)
    if point is None:
        return bag

    family = options.series_family(series.name, series.type)
    bag["@@x"] = _as_text(format_axis_value(point.row.get("x", point.x), "x", options))
    if family in ANY_Y_FAMILIES:
        y_axis = options.series_axis(series.name, series.yaxis)
        bag["@@y"] = _as_text(format_axis_value(point.row.get("y", point.y), y_axis, options))
    else:
        bag["@@y"] = format_number(point.y)
    if point.y_error is not None:
        bag["@@yError"] = format_number(point.y_error)
    if point.size is not None:
        bag["@@size"] = format_number(point.size)
    if options.percent_mode and point.y_percent is not None:
        bag["@@yPercent"] = format_percent(abs(point.y_percent))

    for key, value in point.raw.items():
        bag[str(key)] = _as_text(value)
    return bag


def update_series_text(series_list: Iterable[Series], options: ChartOptions) -> None:
    """Fill `text` and `hover` for every series.

    Formatters are built once and shared across all series. Pie series are
    walked by `labels`, all other families by `x`.

    Args:
        series_list: Visible series to annotate in place.
        options: Chart options.
    """

    format_number = create_number_formatter(options.number_format)
    format_percent = create_number_formatter(options.percent_format)
    format_text = create_text_formatter(options)

    for series in series_list:
        x_values = series.labels if options.is_pie else series.x
        text: list[str] = []
        for x in x_values:
            bag = build_token_bag(
                series,
                x,
                options=options,
                format_number=format_number,
                format_percent=format_percent,
            )
            text.append(format_text(bag))
        series.text = text
        series.hover = list(text)
        logger.debug("Rendered %d text labels for series %r", len(text), series.name)


def _as_text(value: object) -> str:
    """Convert a normalized value to token text (None renders empty)."""

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
