"""Range selection state machine.

A selection is either Open (only a start has been picked) or Closed (both
endpoints picked). Every day tap moves an Open range to Closed and a Closed
range back to Open with the tapped day as its new start.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Union

from calrange.calendar import days_in_month
from calrange.config import YearDayPolicy, get_year_day_policy
from calrange.utils import as_date
from calrange.validation import ValidationError, validate_bounds, validate_selection

SelectableDayPredicate = Callable[[date], bool]


@dataclass(frozen=True)
class DateBounds:
    """Inclusive selectable universe [first_date, last_date]."""

    first_date: date
    last_date: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "first_date", as_date(self.first_date))
        object.__setattr__(self, "last_date", as_date(self.last_date))
        validate_bounds(self.first_date, self.last_date)

    def __contains__(self, day: date) -> bool:
        return self.first_date <= as_date(day) <= self.last_date

    def clamp(self, day: date) -> date:
        """Move a date into the bounds."""
        day = as_date(day)
        return min(max(day, self.first_date), self.last_date)


@dataclass(frozen=True)
class OpenRange:
    """Selection in progress: a start date without an end."""

    start: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_date(self.start))

    @property
    def end(self) -> None:
        return None

    @property
    def is_open(self) -> bool:
        return True

    @property
    def is_closed(self) -> bool:
        return False

    def contains(self, day: date) -> bool:
        return as_date(day) == self.start

    def as_list(self) -> list[date]:
        return [self.start]


@dataclass(frozen=True)
class ClosedRange:
    """Completed selection with start <= end."""

    start: date
    end: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_date(self.start))
        object.__setattr__(self, "end", as_date(self.end))
        if self.end < self.start:
            raise ValidationError(
                f"end {self.end.isoformat()} is before start {self.start.isoformat()}"
            )

    @property
    def is_open(self) -> bool:
        return False

    @property
    def is_closed(self) -> bool:
        return True

    def contains(self, day: date) -> bool:
        return self.start <= as_date(day) <= self.end

    def as_list(self) -> list[date]:
        return [self.start, self.end]


SelectionRange = Union[OpenRange, ClosedRange]


def make_selection(
    start: date,
    end: date | None = None,
    bounds: DateBounds | None = None,
) -> SelectionRange:
    """Build a selection from a start and an optional end.

    Args:
        start: First selected day.
        end: Last selected day, or None while the range is still open.
        bounds: When given, both endpoints must lie inside them.

    Raises:
        ValidationError: If end is before start or an endpoint is out of bounds
    """
    start = as_date(start)
    end = as_date(end) if end is not None else None
    if bounds is not None:
        validate_selection(start, end, bounds.first_date, bounds.last_date)
    if end is None:
        return OpenRange(start)
    return ClosedRange(start, end)


def is_selectable(
    day: date,
    bounds: DateBounds,
    predicate: SelectableDayPredicate | None = None,
) -> bool:
    """True if a day cell is interactive."""
    day = as_date(day)
    if day not in bounds:
        return False
    return predicate is None or bool(predicate(day))


def on_day_tapped(state: SelectionRange, tapped: date) -> SelectionRange:
    """Return the selection that follows a tap on `tapped`.

    The caller guarantees `tapped` is selectable; it is not re-validated.
    """
    tapped = as_date(tapped)
    if state.is_closed:
        return OpenRange(tapped)
    if tapped <= state.start:
        return ClosedRange(tapped, state.start)
    return ClosedRange(state.start, tapped)


def year_range(bounds: DateBounds) -> list[int]:
    """Years offered by the year list, oldest first."""
    return list(range(bounds.first_date.year, bounds.last_date.year + 1))


def initial_year_offset(bounds: DateBounds, state: SelectionRange) -> int:
    """Position in the year list that should be scrolled into view."""
    anchor = state.end if state.end is not None else state.start
    return anchor.year - bounds.first_date.year


def relocate_to_year(
    day: date,
    year: int,
    policy: YearDayPolicy | None = None,
) -> date:
    """Move a date to another year, keeping its month and day.

    Feb 29 has no counterpart in a non-leap year; `policy` decides whether
    that clamps to Feb 28 or raises ValidationError.
    """
    day = as_date(day)
    policy = policy or get_year_day_policy()
    last_day = days_in_month(year, day.month)
    if day.day <= last_day:
        return date(year, day.month, day.day)
    if policy == "reject":
        raise ValidationError(
            f"{day.month:02d}-{day.day:02d} does not exist in {year}"
        )
    if policy != "clamp":
        raise ValidationError(f"Unknown year_day_policy: {policy}")
    return date(year, day.month, last_day)


def select_year(
    state: SelectionRange,
    year: int,
    bounds: DateBounds,
    policy: YearDayPolicy | None = None,
) -> OpenRange:
    """Reopen the selection with its start moved to `year`.

    The end is always discarded, even when a range was complete. The new
    start is kept inside the bounds.
    """
    if year not in range(bounds.first_date.year, bounds.last_date.year + 1):
        raise ValidationError(
            f"year {year} outside bounds "
            f"[{bounds.first_date.year}, {bounds.last_date.year}]"
        )
    start = relocate_to_year(state.start, year, policy)
    return OpenRange(bounds.clamp(start))
