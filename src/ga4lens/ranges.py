"""Date range resolution and query parameter parsing.

everything the dashboard sends us arrives as a string (or not at all), so
this is the one place where raw query values get turned into something the
view builders can use.
"""

import math
import re
from datetime import date, timedelta

from ga4lens.errors import InvalidQueryParameter
from ga4lens.models.report import DateRange

DEFAULT_DAYS = 28
DEFAULT_LIMIT = 10


def default_range(days: int = DEFAULT_DAYS, today: date | None = None) -> DateRange:
    """Trailing window of `days` calendar days ending today, inclusive.

    so days=28 on 2024-01-28 gives 2024-01-01..2024-01-28.
    """
    end = today or date.today()
    start = end - timedelta(days=days - 1)
    return DateRange(start_date=start.isoformat(), end_date=end.isoformat())


def resolve_range(
    start: str | None,
    end: str | None,
    days: int = DEFAULT_DAYS,
    today: date | None = None,
) -> DateRange:
    """Use the caller's bounds when both are given, else the default window.

    only one bound given falls back to the default window rather than
    erroring. dates are not validated - a malformed date is the api's problem.
    """
    if start and end:
        return DateRange(start_date=start, end_date=end)
    return default_range(days, today)


_STRICT_LIMIT = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_INFINITY = re.compile(r"([+-]?)Infinity")
_RADIX = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}


def parse_limit(
    value: str | int | None,
    default: int = DEFAULT_LIMIT,
    strict: bool = True,
) -> int | None:
    """Parse a `limit` query value into a slice bound.

    strict mode only accepts plain ascii digit strings and raises otherwise.
    lenient mode mimics javascript's Number() coercion: garbage becomes 0 (no
    rows), fractions truncate toward zero, negatives count from the end and
    +Infinity means everything (returned as None).
    """
    if value is None:
        return default
    if isinstance(value, int):
        parsed = value
    elif strict:
        if not _STRICT_LIMIT.fullmatch(value):
            raise InvalidQueryParameter("limit", value, "expected a non-negative integer")
        parsed = int(value)
    else:
        return _coerce_limit(value)

    if strict and parsed < 0:
        raise InvalidQueryParameter("limit", value, "expected a non-negative integer")
    return parsed


def _coerce_limit(value: str) -> int | None:
    text = value.strip()
    if not text:
        return 0  # empty string coerces to zero

    if _DECIMAL.fullmatch(text):
        number = float(text)  # may overflow to inf, like Number("1e400")
        if math.isinf(number):
            return None if number > 0 else 0
        return int(number)

    infinity = _INFINITY.fullmatch(text)
    if infinity:
        return 0 if infinity.group(1) == "-" else None

    if _RADIX.fullmatch(text):
        return int(text[2:], _RADIX_BASES[text[1].lower()])

    return 0  # NaN
