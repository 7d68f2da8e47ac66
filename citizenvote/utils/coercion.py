"""
Input coercion helpers shared by the service layer.

Request payloads arrive as loosely typed JSON (numbers as strings, blank
strings for "no value"), so every service funnels its numeric, id and date
fields through these helpers before touching the ORM.
"""

from datetime import date, datetime
from typing import Any

from django.core.exceptions import ValidationError

# Upper bounds of the integer columns these values are written to
MAX_COUNT = 2_147_483_647
MAX_ID = 9_223_372_036_854_775_807


def to_non_negative_int(value: Any) -> int:
    """
    Coerce a loosely typed count to a non-negative integer.

    Missing or unparsable values become 0. The result is clamped to
    0..MAX_COUNT so it always fits an integer column.

    Example:
        >>> to_non_negative_int("15000")
        15000
        >>> to_non_negative_int("12.7")
        12
        >>> to_non_negative_int("abc")
        0
    """
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
    return min(max(0, number), MAX_COUNT)


def to_optional_id(value: Any, field: str = "id") -> int | None:
    """
    Coerce a reference id to int, or None when the value is blank.

    Raises:
        ValidationError: If a non-blank value is not an integer, or is out
            of range for an id column
    """
    if isinstance(value, bool):
        raise ValidationError({field: [f"{field} must be an integer"]})
    if not value or not str(value).strip():
        return None
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise ValidationError({field: [f"{field} must be an integer"]}) from e
    if abs(number) > MAX_ID:
        raise ValidationError({field: [f"{field} is out of range"]})
    return number


def to_optional_date(value: Any, field: str = "date") -> date | None:
    """
    Parse a YYYY-MM-DD string (or pass a date through); blank gives None.

    Raises:
        ValidationError: If the value is not a valid ISO date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise ValidationError(
            {field: ["Invalid date format. Use YYYY-MM-DD"]}
        ) from e
