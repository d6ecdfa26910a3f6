"""numeral-style number formatting.

A pattern is compiled once per transform call and the resulting formatter is
reused for every point. Supported pattern features:

- literal prefix/suffix text (`$0,0.00`, `0.0 units`),
- `,` in the integer part for thousands separators,
- `.00` fixed decimals, `.[00]` optional trailing decimals, `[.]00` decimals
  dropped entirely when they round to zero,
- `+` to force a sign, `(`...`)` for parenthesised negatives,
- `a` for k/m/b/t abbreviation,
- `%` rendered literally; values are already percentages and are not scaled.

Formatters never raise: `None`, empty strings and non-finite numbers render
as an empty string and non-numeric values are returned as strings.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final

NumberFormatter = Callable[[object], str]

_PATTERN_RE: Final = re.compile(
    r"^(?P<prefix>[^0#+\-(\[.]*)"
    r"(?P<sign>[+\-]?)"
    r"(?P<paren>\(?)"
    r"(?P<int>[0#][0#,]*)"
    r"(?P<dec>(?:\[\.\]|\.)[0#]*(?:\[[0#]+\])?)?"
    r"(?:(?P<abbr>\s?a)(?![A-Za-z]))?"
    r"(?P<paren_close>\)?)"
    r"(?P<suffix>.*)$"
)

_ABBREVIATIONS: Final[tuple[tuple[Decimal, str], ...]] = (
    (Decimal(1_000_000_000_000), "t"),
    (Decimal(1_000_000_000), "b"),
    (Decimal(1_000_000), "m"),
    (Decimal(1_000), "k"),
)


@dataclass(frozen=True, slots=True)
class NumberPattern:
    """Compiled numeral-style pattern.

    Attributes:
        prefix: Literal text placed before the number.
        suffix: Literal text placed after the number (and abbreviation).
        thousands: Whether to group integer digits by thousands.
        fixed_decimals: Decimal digits that are always rendered.
        optional_decimals: Extra decimal digits rendered only when non-zero.
        optional_point: Drop the decimal part when it rounds to zero (`[.]`).
        force_sign: Render `+` for positive values.
        parens: Render negative values in parentheses.
        abbreviate: Scale by k/m/b/t and append the letter.
        abbreviation_space: Separator placed before the abbreviation letter.
    """

    prefix: str = ""
    suffix: str = ""
    thousands: bool = False
    fixed_decimals: int = 0
    optional_decimals: int = 0
    optional_point: bool = False
    force_sign: bool = False
    parens: bool = False
    abbreviate: bool = False
    abbreviation_space: str = ""


def parse_number_pattern(pattern: str) -> NumberPattern | None:
    """Compile a numeral-style pattern.

    Args:
        pattern: Pattern string such as `0,0[.]00` or `0.0%`.

    Returns:
        NumberPattern, or None when the pattern is empty or has no numeric
        placeholder (callers then fall back to plain string conversion).
    """

    if not pattern:
        return None
    match = _PATTERN_RE.match(pattern)
    if match is None:
        return None

    dec = match.group("dec") or ""
    optional_point = dec.startswith("[.]")
    digits = dec[3:] if optional_point else dec[1:]
    fixed_part, _, optional_part = digits.partition("[")
    abbr = match.group("abbr") or ""

    return NumberPattern(
        prefix=match.group("prefix"),
        suffix=match.group("suffix"),
        thousands="," in match.group("int"),
        fixed_decimals=len(fixed_part),
        optional_decimals=len(optional_part.rstrip("]")),
        optional_point=optional_point,
        force_sign=match.group("sign") == "+",
        parens=bool(match.group("paren")) and bool(match.group("paren_close")),
        abbreviate=bool(abbr),
        abbreviation_space=abbr[:-1],
    )


def create_number_formatter(pattern: str | None) -> NumberFormatter:
    """Build a reusable formatter for a numeral-style pattern.

    Args:
        pattern: Pattern string; empty or None selects plain string conversion.

    Returns:
        Callable mapping a value to its display string.
    """

    compiled = parse_number_pattern(pattern or "")
    if compiled is None:
        return _format_plain
    return lambda value: format_number(value, compiled)


def format_number(value: object, pattern: NumberPattern) -> str:
    """Format a single value with a compiled pattern.

    Args:
        value: Number-like value (int, float, Decimal or numeric string).
        pattern: Compiled pattern from `parse_number_pattern`.

    Returns:
        Display string; empty for missing or non-finite values.
    """

    number = _to_decimal(value)
    if number is None:
        return "" if _is_missing(value) else str(value)

    negative = number < 0
    magnitude = abs(number)

    abbreviation = ""
    if pattern.abbreviate:
        for threshold, letter in _ABBREVIATIONS:
            if magnitude >= threshold:
                magnitude = magnitude / threshold
                abbreviation = pattern.abbreviation_space + letter
                break

    body = _render_digits(magnitude, pattern)
    if body.strip("0.,") == "":
        negative = False

    if negative and pattern.parens:
        signed = f"({body}{abbreviation})"
        return f"{pattern.prefix}{signed}{pattern.suffix}"
    sign = "-" if negative else ("+" if pattern.force_sign else "")
    return f"{sign}{pattern.prefix}{body}{abbreviation}{pattern.suffix}"


def _render_digits(magnitude: Decimal, pattern: NumberPattern) -> str:
    """Render a non-negative Decimal according to grouping/decimal rules."""

    places = pattern.fixed_decimals + pattern.optional_decimals
    quantum = Decimal(1).scaleb(-places)
    try:
        rounded = magnitude.quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        rounded = magnitude

    integer_part, _, fraction = format(rounded, "f").partition(".")
    fraction = fraction.ljust(places, "0")[:places]

    if pattern.optional_decimals:
        keep = len(fraction.rstrip("0"))
        fraction = fraction[: max(pattern.fixed_decimals, keep)]
    if pattern.optional_point and fraction.strip("0") == "":
        fraction = ""

    if pattern.thousands:
        integer_part = f"{int(integer_part):,}"
    return f"{integer_part}.{fraction}" if fraction else integer_part


def _to_decimal(value: object) -> Decimal | None:
    """Return a finite Decimal for number-like input, or None."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value)) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
        return parsed if parsed.is_finite() else None
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    if isinstance(value, numbers.Real):
        return _to_decimal(float(value))
    return None


def _is_missing(value: object) -> bool:
    """Return True for values rendered as an empty string."""

    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == "" or value.strip().lower() in {"nan", "inf", "-inf", "infinity", "-infinity"}
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, Decimal):
        return not value.is_finite()
    return False


def _format_plain(value: object) -> str:
    """Plain conversion used when no pattern is configured."""

    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
