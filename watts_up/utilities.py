# pylint: disable=line-too-long, missing-module-docstring

import math
from numbers import Real
from typing import Any, Optional, Union

import pendulum

Number = Union[int, float]


def to_number(value: Any) -> Optional[float]:
    """
    Interpret a value as a finite number, accepting both numbers and numeric strings (as given by form fields).
    :param value: The value to interpret, e.g. 150, 1.5, or " 2.5 ".
    :return: The value as a float, or None if it is missing, not numeric, NaN, or infinite.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def non_negative(value: Any) -> Optional[float]:
    """
    Interpret a value as a finite number that is zero or larger.
    :param value: The value to interpret.
    :return: The value as a float, or None if it cannot be interpreted or is negative.
    """
    number = to_number(value)
    return number if number is not None and number >= 0 else None


def timestamp_ms(date: Optional[pendulum.DateTime] = None) -> int:
    """
    Convert a date into a Unix millisecond timestamp.
    :param date: The date to convert; defaults to the current time.
    :return: The number of milliseconds since the Unix epoch.
    """
    date = date if date is not None else pendulum.now()
    return date.int_timestamp * 1_000 + date.microsecond // 1_000
