"""Typed field value coercion helpers."""

from __future__ import annotations

import math
import sys
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from listschema.typing.enums import FieldType

TRUTHY_STRINGS = frozenset({"true", "on", "yes", "1"})
FALSY_STRINGS = frozenset({"false", "off", "no", "0"})
MAX_NUMBER = Decimal(sys.float_info.max)


def is_empty_value(value: Any) -> bool:
    """Return whether a form value counts as missing.

    Args:
        value (Any): Raw form value.

    Returns:
        bool: True for `None`, blank strings and empty collections.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | tuple | set | frozenset):
        return len(value) == 0
    return False


def coerce_number(value: Any) -> int | float:
    """Convert numbers and numeric strings to `int` or `float`.

    Values beyond the float range are rejected.

    Args:
        value (Any): Raw value.

    Raises:
        ValueError: If the value is not a finite number in float range.

    Returns:
        int | float: `int` when the value is integral.
    """
    if isinstance(value, bool):
        raise ValueError("Booleans are not numbers")  # noqa: TRY003
    if isinstance(value, int):
        if abs(value) > sys.float_info.max:
            raise ValueError("Number is out of range")  # noqa: TRY003
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("Number must be finite")  # noqa: TRY003
        return value
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError("Not a number") from exc  # noqa: TRY003
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError("Number must be finite")  # noqa: TRY003
        if abs(value) > MAX_NUMBER:
            raise ValueError("Number is out of range")  # noqa: TRY003
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    raise ValueError("Not a number")  # noqa: TRY003


def coerce_boolean(value: Any) -> bool:
    """Normalize truthy and falsy form values.

    Args:
        value (Any): Raw value, e.g. `True`, `"on"`, `"0"`, `1`.

    Raises:
        ValueError: If the value is not a recognized flag.

    Returns:
        bool: Normalized flag.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in {0, 1}:
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUTHY_STRINGS:
            return True
        if lowered in FALSY_STRINGS:
            return False
    raise ValueError("Not a boolean")  # noqa: TRY003


def coerce_date(value: Any) -> date:
    """Convert a date, datetime or ISO string into a `date`.

    Args:
        value (Any): Raw value.

    Raises:
        ValueError: If the value is not a date.

    Returns:
        date: Calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return datetime.fromisoformat(text).date()
    raise ValueError("Not a date")  # noqa: TRY003


def coerce_datetime(value: Any) -> datetime:
    """Convert a datetime, date or ISO string into a `datetime`.

    Args:
        value (Any): Raw value.

    Raises:
        ValueError: If the value is not a datetime.

    Returns:
        datetime: Timestamp, midnight for plain dates.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise ValueError("Not a datetime")  # noqa: TRY003


def coerce_choices(value: Any) -> list[str]:
    """Convert a sequence or comma-separated string into a list of options.

    Args:
        value (Any): Raw value.

    Raises:
        ValueError: If the value is neither a string nor a sequence.

    Returns:
        list[str]: Selected options.
    """
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, list | tuple | set | frozenset):
        return [comparable_text(item) for item in value]
    raise ValueError("Not a list")  # noqa: TRY003


def coerce_text(value: Any) -> str:
    """Convert scalar values into text.

    Args:
        value (Any): Raw value.

    Raises:
        ValueError: If the value is a collection.

    Returns:
        str: Text value.
    """
    if isinstance(value, list | tuple | set | frozenset | dict):
        raise ValueError("Not text")  # noqa: TRY003
    return comparable_text(value)


def comparable_text(value: Any) -> str:
    """Return the canonical text form used for comparisons.

    Args:
        value (Any): Raw value.

    Returns:
        str: `true`/`false` for flags, integral floats without `.0`.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list | tuple):
        return ",".join(comparable_text(item) for item in value)
    return str(value)


def normalize_phone(value: str) -> str:
    """Keep digits and a single leading `+`, turning a `00` prefix into `+`."""
    compact = "".join(ch for ch in value if ch.isdigit() or ch == "+")
    if compact.startswith("00"):
        return "+" + compact[2:]
    if compact.count("+") > 1 or "+" in compact[1:]:
        return compact.replace("+", "")
    return compact


def coerce_value(value: Any, field_type: FieldType) -> Any:
    """Coerce a non-empty raw value to the Python type of `field_type`.

    Args:
        value (Any): Raw value.
        field_type (FieldType): Target field type.

    Raises:
        ValueError: If the value cannot be converted.

    Returns:
        Any: Coerced value.
    """
    if field_type == FieldType.NUMBER:
        return coerce_number(value)
    if field_type.is_boolean:
        return coerce_boolean(value)
    if field_type == FieldType.DATE:
        return coerce_date(value)
    if field_type == FieldType.DATETIME:
        return coerce_datetime(value)
    if field_type == FieldType.MULTISELECT:
        return coerce_choices(value)
    text = coerce_text(value).strip()
    if field_type == FieldType.EMAIL:
        return text.lower()
    if field_type == FieldType.TEL:
        return normalize_phone(text)
    return text
