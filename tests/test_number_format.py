"""Unit tests for numeral-style number formatting."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from seriesdata.number_format import create_number_formatter, parse_number_pattern

pytestmark = pytest.mark.unit


def test_thousands_separator_rounds_half_up() -> None:
    """`0,0` groups thousands and rounds to an integer."""

    fmt = create_number_formatter("0,0")
    assert fmt(1234567.891) == "1,234,568"
    assert fmt(2.5) == "3"
    assert fmt(Decimal("999.4")) == "999"


def test_fixed_and_optional_decimals() -> None:
    """Fixed decimals pad; `[.]` and `.[..]` drop zero decimals."""

    assert create_number_formatter("0,0.00")(1234.5) == "1,234.50"
    assert create_number_formatter("0[.]00")(30) == "30"
    assert create_number_formatter("0[.]00")(30.5) == "30.50"
    assert create_number_formatter("0.[00]")(1.5) == "1.5"
    assert create_number_formatter("0.[00]")(1) == "1"
    assert create_number_formatter("0.[00]")(1.256) == "1.26"
    assert create_number_formatter("0.0[0]")(1) == "1.0"


def test_percent_suffix_is_not_scaled() -> None:
    """Percent patterns append `%` to values that are already percentages."""

    assert create_number_formatter("0.0%")(33.333) == "33.3%"
    assert create_number_formatter("0[.]00%")(25) == "25%"


def test_prefix_sign_and_parentheses() -> None:
    """Literal prefixes, forced signs and parenthesised negatives."""

    assert create_number_formatter("$0,0.00")(-1234.5) == "-$1,234.50"
    assert create_number_formatter("(0,0)")(-5) == "(5)"
    assert create_number_formatter("(0,0)")(5) == "5"
    assert create_number_formatter("+0")(5) == "+5"
    assert create_number_formatter("0,0")(-0.4) == "0"


def test_abbreviation() -> None:
    """`a` scales by k/m/b/t and keeps the optional separator."""

    assert create_number_formatter("0.0a")(1234567) == "1.2m"
    assert create_number_formatter("0.0 a")(1500) == "1.5 k"
    assert create_number_formatter("0a")(999) == "999"


def test_missing_and_non_finite_values_render_empty() -> None:
    """None, empty strings, NaN and infinities never raise."""

    fmt = create_number_formatter("0,0.00")
    assert fmt(None) == ""
    assert fmt("") == ""
    assert fmt(math.nan) == ""
    assert fmt(math.inf) == ""
    assert fmt(-math.inf) == ""


def test_non_numeric_values_pass_through() -> None:
    """Non-numeric input is returned as a string; numeric strings are formatted."""

    fmt = create_number_formatter("0,0")
    assert fmt("n/a") == "n/a"
    assert fmt("1234") == "1,234"


def test_empty_pattern_uses_plain_conversion() -> None:
    """An empty pattern renders values as plain strings."""

    fmt = create_number_formatter("")
    assert parse_number_pattern("") is None
    assert fmt(3.0) == "3"
    assert fmt(2.5) == "2.5"
    assert fmt(None) == ""
    assert fmt(math.nan) == ""


def test_other_real_number_types_are_formatted() -> None:
    """Any `numbers.Real` value gets the pattern applied, not just builtins."""

    fmt = create_number_formatter("0,0.0")
    assert fmt(Fraction(1234567)) == "1,234,567.0"
    assert fmt(Fraction(7, 2)) == "3.5"


def test_suffix_starting_with_a_is_not_an_abbreviation() -> None:
    """`a` only abbreviates when it ends the numeric part of the pattern."""

    assert create_number_formatter("0 apples")(1500) == "1500 apples"
    assert create_number_formatter("0,0 apples")(1500) == "1,500 apples"
    assert create_number_formatter("0.0a")(1500) == "1.5k"
