"""Date parsing and formatting for SEPA documents and export file names"""

import re
from datetime import date, datetime, timedelta
from typing import Union

from sepa_gateway.domain.exceptions import InvalidExecutionDate, InvalidExportMonth

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def parse_execution_date(value: Union[str, date, datetime, None]) -> date:
    """
    Coerce a caller-supplied execution date into a calendar date.

    Accepts date/datetime objects or ISO strings ("2024-05-03" or a full
    ISO date-time, whose date part is used).

    Raises:
        InvalidExecutionDate: For anything that is not a parsable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidExecutionDate(f"Invalid execution date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidExecutionDate(f"Invalid execution date: {value!r}") from e


def validate_month(month: str) -> str:
    """Ensure an export month is YYYY-MM"""
    if not isinstance(month, str) or not MONTH_PATTERN.match(month):
        raise InvalidExportMonth(f"Month must be in YYYY-MM format, got {month!r}")
    return month


def add_days(from_date: date, days: int) -> date:
    """Add calendar days to a date (no banking holiday calendar)"""
    return from_date + timedelta(days=days)


def format_date(value: date) -> str:
    """ISODate: plain calendar date, no time component"""
    return value.strftime("%Y-%m-%d")


def format_datetime(value: datetime) -> str:
    """ISODateTime in local time without a trailing zone marker"""
    return value.replace(tzinfo=None).strftime("%Y-%m-%dT%H:%M:%S")
