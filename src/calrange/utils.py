"""Common utility functions for calrange."""

from datetime import date, datetime
from typing import Any

import pandas as pd


def _is_pandas_timestamp(value: Any) -> bool:
    """Check if value is a pandas Timestamp."""
    return isinstance(value, pd.Timestamp)


def as_date(value: date | datetime | pd.Timestamp) -> date:
    """Truncate a date-like value to day granularity.

    Time-of-day is dropped, so two values on the same calendar day compare
    equal afterwards.
    """
    if value is pd.NaT:
        raise TypeError("Cannot convert NaT to a calendar date")
    if _is_pandas_timestamp(value):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date-like value, got {type(value).__name__}")
