"""Helpers for "YYYY-MM" month periods."""

import re
from datetime import date
from typing import Tuple

from dateutil.relativedelta import relativedelta

from errors import ValidationError

_MONTH_PATTERN = re.compile(r"(\d{4})-(0[1-9]|1[0-2])")


def parse_month(month: str) -> Tuple[int, int]:
    """Parse a canonical "YYYY-MM" string into (year, month).

    Raises:
        ValidationError: If the string is not in canonical form.
    """
    match = _MONTH_PATTERN.fullmatch(month or "")
    if not match:
        raise ValidationError(
            f"month must be YYYY-MM, got {month!r}", code="invalid_month"
        )
    return int(match.group(1)), int(match.group(2))


def month_range(month: str) -> Tuple[date, date]:
    """Get the first and last day of a month, both inclusive."""
    year, month_num = parse_month(month)
    first_day = date(year, month_num, 1)
    return first_day, first_day + relativedelta(day=31)
