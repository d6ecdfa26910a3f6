"""Axis-aware value normalization.

Values are coerced to the representation their axis expects before they are
placed into label text. Like `quantity` parsing elsewhere, this module is
best-effort: it never raises on unknown or malformed input and hands the
original value back instead.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime
from typing import Final

from .schema import ChartOptions

DATETIME_AXIS_TYPES: Final[frozenset[str]] = frozenset({"datetime", "date"})
CATEGORY_AXIS_TYPES: Final[frozenset[str]] = frozenset({"category"})
NUMERIC_AXIS_TYPES: Final[frozenset[str]] = frozenset({"linear", "logarithmic", "log"})

_MOMENT_TOKEN_RE: Final = re.compile(
    r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|SSS|A|a|ZZ|Z"
)


def normalize_value(value: object, axis_type: str | None, date_time_format: str) -> object:
    """Normalize a raw cell value for an axis type.

    Args:
        value: Raw value from the query result.
        axis_type: Axis kind (`category`, `datetime`, `linear`, ...) or None.
        date_time_format: moment-style pattern used for datetime axes.

    Returns:
        A formatted timestamp string for datetime axes, a string for category
        axes, and the untouched value otherwise (including unparsable input).
    """

    if axis_type is None:
        return value
    if axis_type in DATETIME_AXIS_TYPES:
        parsed = parse_timestamp(value)
        if parsed is None:
            return value
        return format_moment(parsed, date_time_format)
    if axis_type in CATEGORY_AXIS_TYPES:
        if value is None:
            return value
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return value


def format_axis_value(value: object, axis: str | None, options: ChartOptions) -> object:
    """Normalize a value using the axis type configured for `axis`.

    Args:
        value: Raw value from the query result.
        axis: Axis key (`"x"`, `"y"`, `"y2"`); unknown keys disable normalization.
        options: Chart options providing axis types and the datetime pattern.

    Returns:
        The normalized value (see `normalize_value`).
    """

    return normalize_value(value, options.axis_type(axis), options.date_time_format)


def parse_timestamp(value: object) -> datetime | None:
    """Best-effort UTC timestamp parsing.

    Accepts datetimes (naive values are treated as UTC), dates, ISO-8601
    strings (a trailing `Z` is accepted) and epoch milliseconds.
    """

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return parse_timestamp(parsed)
    return None


def format_moment(value: datetime, pattern: str) -> str:
    """Render a datetime with a moment-style pattern.

    Args:
        value: Timestamp to render.
        pattern: Pattern such as `DD/MM/YYYY HH:mm`. Text inside `[...]` is
            emitted literally; characters that are not tokens are kept.

    Returns:
        Rendered string. An empty pattern renders ISO-8601.
    """

    if not pattern:
        return value.isoformat()
    return _MOMENT_TOKEN_RE.sub(lambda match: _render_token(value, match.group(0)), pattern)


def _render_token(value: datetime, token: str) -> str:
    """Render a single moment token."""

    if token.startswith("["):
        return token[1:-1]
    hour12 = value.hour % 12 or 12
    renderers = {
        "YYYY": lambda: f"{value.year:04d}",
        "YY": lambda: f"{value.year % 100:02d}",
        "MMMM": lambda: value.strftime("%B"),
        "MMM": lambda: value.strftime("%b"),
        "MM": lambda: f"{value.month:02d}",
        "M": lambda: str(value.month),
        "DD": lambda: f"{value.day:02d}",
        "D": lambda: str(value.day),
        "dddd": lambda: value.strftime("%A"),
        "ddd": lambda: value.strftime("%a"),
        "HH": lambda: f"{value.hour:02d}",
        "H": lambda: str(value.hour),
        "hh": lambda: f"{hour12:02d}",
        "h": lambda: str(hour12),
        "mm": lambda: f"{value.minute:02d}",
        "m": lambda: str(value.minute),
        "ss": lambda: f"{value.second:02d}",
        "s": lambda: str(value.second),
        "SSS": lambda: f"{value.microsecond // 1000:03d}",
        "A": lambda: "AM" if value.hour < 12 else "PM",
        "a": lambda: "am" if value.hour < 12 else "pm",
        "Z": lambda: _utc_offset(value, separator=":"),
        "ZZ": lambda: _utc_offset(value, separator=""),
    }
    return renderers[token]()


def _utc_offset(value: datetime, *, separator: str) -> str:
    """Return the `+HH:MM` offset of an aware datetime (UTC for naive values)."""

    offset = value.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{mins:02d}"
