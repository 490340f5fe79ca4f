"""
Field coercion: deciding whether a raw CSV field is a number.

A field is numeric when it is a plain ASCII decimal literal (optionally
signed, optionally with an exponent) naming a finite float. Anything else is
an absent number (``None``), never NaN.
"""

import math
import re
from enum import Enum
from typing import Any

from adoption_dashboard.core.errors import CoercionFailure
from adoption_dashboard.observability.metrics import coercion_failures_total, increment_counter


Number = float | int

# Python-only spellings ("1_000", non-ASCII digits, "inf") do not match
NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class CoercionPolicy(str, Enum):
    """
    When non-key columns are converted to numbers.

    - EAGER: at parse time; stored values are numbers where they parse
    - LAZY: on read; stored values stay the raw strings
    """

    EAGER = "eager"
    LAZY = "lazy"


def parse_number(value: Any, column: str | None = None) -> float:
    """
    Strictly read a value as a finite float.

    Args:
        value: Raw field value (string or number)
        column: Column name, used in the error message

    Returns:
        The parsed float

    Raises:
        CoercionFailure: If the value is empty, non-numeric, or not finite
    """
    if isinstance(value, bool) or value is None:
        raise CoercionFailure(value, column)

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise CoercionFailure(value, column) from None
    elif isinstance(value, str):
        text = value.strip()
        if not NUMBER_PATTERN.fullmatch(text):
            raise CoercionFailure(value, column)
        number = float(text)
    else:
        raise CoercionFailure(value, column)

    if not math.isfinite(number):
        raise CoercionFailure(value, column)
    return number


def to_number(value: Any, column: str | None = None) -> float | None:
    """
    Leniently read a value as a number.

    Returns:
        The parsed float, or None when the value is not numeric
    """
    try:
        return parse_number(value, column)
    except CoercionFailure:
        increment_counter(coercion_failures_total, column=column or "")
        return None


def to_year(value: Any) -> int | None:
    """
    Read a Year field as an integer.

    "2021" and 2021.0 are both 2021; fractional or non-numeric years are
    absent.
    """
    number = to_number(value, "Year")
    if number is None or not number.is_integer():
        return None
    return int(number)


def coerce_field(value: str, column: str, is_key: bool, policy: CoercionPolicy) -> str | Number:
    """
    Decide the stored value of one parsed field.

    Key columns and everything under the lazy policy keep the raw string.
    Under the eager policy a numeric field becomes a float (or an int when
    it is integral, so years stay years); a non-numeric one keeps its text so
    categorical columns survive.
    """
    if is_key or policy is CoercionPolicy.LAZY:
        return value

    try:
        number = parse_number(value, column)
    except CoercionFailure:
        return value
    if INTEGER_PATTERN.fullmatch(value.strip()):
        return int(value)
    return number
