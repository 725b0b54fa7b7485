# src/land4health/indicators/validation.py

"""
This module validates the temporal arguments shared by the indicator functions.
"""

import datetime
import re
from typing import Tuple

__all__ = [
    "parse_date",
    "check_year",
    "check_year_range"
]

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def parse_date(value, arg: str) -> datetime.date:
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        raise ValueError(f"Parameter '{arg}' must be in 'YYYY-MM-DD' format. Got: {value!r}")
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Parameter '{arg}' is not a valid date. Got: {value!r}") from None

def check_year(value, arg: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1000 <= value <= 9999:
        raise ValueError(f"Parameter '{arg}' must be a 4-digit integer year. Got: {value!r}")
    return value

def check_year_range(from_year: int, to_year: int, start_year: int, end_year: int) -> Tuple[int, int]:
    if to_year < from_year:
        raise ValueError("Parameter 'to' must be greater than or equal to 'from'")
    if from_year < start_year or to_year > end_year:
        raise ValueError(
            f"Years must be in the range {start_year} to {end_year}. Got: {from_year} to {to_year}"
        )
    return from_year, to_year
