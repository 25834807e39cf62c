"""
Date utility functions for RenewalReminders.
Handles date parsing, validation, and calendar-day arithmetic.
"""

import datetime
import re

from dateutil import tz
from dateutil.relativedelta import relativedelta


def parse_date(value):
    """
    Parse a value into a calendar date.
    Supports date/datetime objects, ISO format (YYYY-MM-DD) and other common formats.

    Args:
        value (str, datetime.date or datetime.datetime): Value to parse

    Returns:
        datetime.date: Parsed calendar date (any time component is dropped)

    Raises:
        ValueError: If the value is empty or the format is invalid
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date value: {value!r}")

    date_str = value.strip()

    # Try ISO format first (YYYY-MM-DD, or a full timestamp)
    try:
        return datetime.datetime.fromisoformat(date_str).date()
    except ValueError:
        pass

    formats = [
        '%Y-%m-%d',  # 2023-01-31
        '%d/%m/%Y',  # 31/01/2023
        '%m/%d/%Y',  # 01/31/2023
        '%d.%m.%Y',  # 31.01.2023
        '%B %d, %Y',  # January 31, 2023
        '%d %B %Y',  # 31 January 2023
    ]

    for date_format in formats:
        try:
            return datetime.datetime.strptime(date_str, date_format).date()
        except ValueError:
            continue

    raise ValueError(f"Invalid date format: {date_str}. Use YYYY-MM-DD format.")


def format_date(date_obj, format_str='%Y-%m-%d'):
    """Format a date object as a string."""
    return date_obj.strftime(format_str)


def validate_date_format(date_str):
    """
    Validate if a string is in ISO date format (YYYY-MM-DD).

    Args:
        date_str (str): Date string to validate

    Returns:
        bool: True if valid ISO format, False otherwise
    """
    pattern = r'^\d{4}-\d{2}-\d{2}$'
    if not date_str or not re.match(pattern, date_str):
        return False

    try:
        datetime.date.fromisoformat(date_str)
        return True
    except ValueError:
        return False


def calculate_next_renewal(start_date, billing_cycle):
    """
    Calculate the next renewal date based on start date and billing cycle.

    Args:
        start_date (datetime.date or str): The start date
        billing_cycle (str): Either 'monthly' or 'yearly'

    Returns:
        datetime.date: The next renewal date

    Raises:
        ValueError: If the billing cycle is invalid
    """
    start_date = parse_date(start_date)

    if billing_cycle.lower() == 'monthly':
        return start_date + relativedelta(months=1)
    elif billing_cycle.lower() == 'yearly':
        return start_date + relativedelta(years=1)
    else:
        raise ValueError(f"Invalid billing cycle: {billing_cycle}. Use 'monthly' or 'yearly'.")


def day_offset(renewal_date, today):
    """
    Whole calendar days from today until the renewal date.

    Negative values mean the renewal date has passed. Time-of-day and
    time zone information on either argument are ignored.

    Args:
        renewal_date (str, datetime.date or datetime.datetime): The renewal date
        today (datetime.date or datetime.datetime): The evaluation day

    Returns:
        int: renewal_date - today, in days
    """
    return (parse_date(renewal_date) - parse_date(today)).days


def today(tz_name=None):
    """
    Current calendar date in the given IANA time zone (local time if None).

    This is the only function in the package that reads the wall clock.
    """
    zone = tz.gettz(tz_name) if tz_name else tz.tzlocal()
    if zone is None:
        raise ValueError(f"Unknown time zone: {tz_name}")
    return datetime.datetime.now(zone).date()
