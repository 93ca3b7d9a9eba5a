"""Month grid layout for a presentation layer."""

from dataclasses import dataclass, field
from datetime import date

from calrange.calendar import (
    DAYS_PER_WEEK,
    days_in_month,
    first_day_offset,
    grid_row_count,
    weekday_order,
)
from calrange.selection import (
    DateBounds,
    SelectableDayPredicate,
    SelectionRange,
    is_selectable,
)
from calrange.validation import validate_week_start

# Indexed by weekday with 0 = Sunday
WEEKDAY_ABBR = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class DayCell:
    """One day of a month grid and how it should be highlighted."""

    date: date
    disabled: bool = False
    is_start: bool = False
    is_end: bool = False
    in_range: bool = False
    is_today: bool = False

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def is_selected(self) -> bool:
        return self.is_start or self.is_end


@dataclass(frozen=True)
class MonthGrid:
    """Rows of day cells for one month; blank cells are None."""

    year: int
    month: int
    week_start: int
    rows: list[list[DayCell | None]] = field(default_factory=list)

    @property
    def weekdays(self) -> list[int]:
        """Weekday index of each column (0 = Sunday)."""
        return weekday_order(self.week_start)

    @property
    def headers(self) -> list[str]:
        return [WEEKDAY_ABBR[i] for i in self.weekdays]

    @property
    def offset(self) -> int:
        return first_day_offset(self.year, self.month, self.week_start)

    def cells(self) -> list[DayCell]:
        """Non-blank cells in day order."""
        return [cell for row in self.rows for cell in row if cell is not None]

    def cell_for(self, day: date) -> DayCell | None:
        if (day.year, day.month) != (self.year, self.month):
            return None
        index = self.offset + day.day - 1
        return self.rows[index // DAYS_PER_WEEK][index % DAYS_PER_WEEK]


def build_month_grid(
    year: int,
    month: int,
    week_start: int,
    bounds: DateBounds,
    selection: SelectionRange | None = None,
    predicate: SelectableDayPredicate | None = None,
    today: date | None = None,
) -> MonthGrid:
    """Lay out a month as full weeks of DayCells.

    Cells outside the bounds or rejected by `predicate` are disabled. A
    closed selection marks every day between its endpoints as in range.
    """
    validate_week_start(week_start)
    offset = first_day_offset(year, month, week_start)
    n_days = days_in_month(year, month)
    n_cells = grid_row_count(year, month, week_start) * DAYS_PER_WEEK

    flat: list[DayCell | None] = []
    for i in range(n_cells):
        day_number = i - offset + 1
        if day_number < 1 or day_number > n_days:
            flat.append(None)
            continue
        day = date(year, month, day_number)
        flat.append(
            DayCell(
                date=day,
                disabled=not is_selectable(day, bounds, predicate),
                is_start=selection is not None and day == selection.start,
                is_end=selection is not None and day == selection.end,
                in_range=selection is not None and selection.is_closed and selection.contains(day),
                is_today=day == today,
            )
        )

    rows = [flat[i:i + DAYS_PER_WEEK] for i in range(0, n_cells, DAYS_PER_WEEK)]
    return MonthGrid(year=year, month=month, week_start=week_start, rows=rows)
