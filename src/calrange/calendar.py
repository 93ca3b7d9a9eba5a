"""Calendar math for month grids.

All functions are pure. Weekday indices follow the common locale
convention where 0 is Sunday and 6 is Saturday.
"""

from datetime import date

DAYS_PER_WEEK = 7

# February is resolved by days_in_month.
_DAYS_IN_MONTH = (31, -1, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap-year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month of the proleptic Gregorian calendar.

    Results for years before the 1582 reform follow the same rule and
    therefore do not match historical calendars.
    """
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return _DAYS_IN_MONTH[month - 1]


def first_day_offset(year: int, month: int, week_start: int) -> int:
    """Return the number of leading blank cells before day 1 of a month.

    September 1, 2017 falls on a Friday. With a Sunday week start the grid
    reads::

        S M T W T F S
        _ _ _ _ _ 1 2

    so the offset is 5. With a Monday week start::

        M T W T F S S
        _ _ _ _ 1 2 3

    the offset is 4.
    """
    # 0-based, Monday = 0
    weekday_from_monday = date(year, month, 1).weekday()
    start_from_monday = (week_start - 1) % DAYS_PER_WEEK
    return (weekday_from_monday - start_from_monday) % DAYS_PER_WEEK


def grid_row_count(year: int, month: int, week_start: int) -> int:
    """Number of week rows needed to lay out a month."""
    cells = first_day_offset(year, month, week_start) + days_in_month(year, month)
    return -(-cells // DAYS_PER_WEEK)


def weekday_order(week_start: int) -> list[int]:
    """Weekday indices (0 = Sunday) in column order for a grid header."""
    return [(week_start + i) % DAYS_PER_WEEK for i in range(DAYS_PER_WEEK)]


def month_start(day: date) -> date:
    """Truncate a date to the first day of its month."""
    return day.replace(day=1)


def month_delta(from_month: date, to_month: date) -> int:
    """Number of months from from_month to to_month; days are ignored."""
    return (to_month.year - from_month.year) * 12 + to_month.month - from_month.month


def add_months(month_date: date, months: int) -> date:
    """Return the month-truncated date `months` months after month_date.

    Negative values move backwards; year carry uses floor division so
    add_months(date(2020, 1, 1), -1) is date(2019, 12, 1).
    """
    year, month_index = divmod(month_date.year * 12 + month_date.month - 1 + months, 12)
    return date(year, month_index + 1, 1)
