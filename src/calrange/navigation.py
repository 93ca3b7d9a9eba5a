"""Month pagination cursor."""

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date

from calrange.calendar import add_months, month_delta, month_start
from calrange.selection import DateBounds, SelectionRange


@dataclass
class MonthCursor:
    """Page index into the months from bounds.first_date to bounds.last_date.

    Page 0 is the month of first_date. Requests past either end are clamped.
    """

    bounds: DateBounds
    page: int = 0

    def __post_init__(self) -> None:
        self.page = self._clamp(self.page)

    @classmethod
    def for_selection(cls, bounds: DateBounds, selection: SelectionRange) -> "MonthCursor":
        """Cursor showing the month of the selection's end, else its start."""
        anchor = selection.end if selection.end is not None else selection.start
        return cls(bounds, month_delta(bounds.first_date, anchor))

    @property
    def page_count(self) -> int:
        return month_delta(self.bounds.first_date, self.bounds.last_date) + 1

    def _clamp(self, page: int) -> int:
        return min(max(page, 0), self.page_count - 1)

    def month_for_page(self, page: int) -> date:
        return add_months(month_start(self.bounds.first_date), page)

    def page_for(self, day: date) -> int:
        """Page showing `day`, clamped to the available pages."""
        return self._clamp(month_delta(self.bounds.first_date, day))

    def is_first_page(self, page: int | None = None) -> bool:
        return (self.page if page is None else page) <= 0

    def is_last_page(self, page: int | None = None) -> bool:
        return (self.page if page is None else page) >= self.page_count - 1

    @property
    def has_previous(self) -> bool:
        """True if the previous-month chevron is enabled."""
        return not self.is_first_page()

    @property
    def has_next(self) -> bool:
        """True if the next-month chevron is enabled."""
        return not self.is_last_page()

    def _month_or_none(self, page: int) -> date | None:
        first = month_start(self.bounds.first_date)
        index = first.year * 12 + first.month - 1 + page
        if not MINYEAR * 12 <= index < (MAXYEAR + 1) * 12:
            return None
        return self.month_for_page(page)

    @property
    def previous_month(self) -> date | None:
        """Month before the current page; None before date.min."""
        return self._month_or_none(self.page - 1)

    @property
    def current_month(self) -> date:
        return self.month_for_page(self.page)

    @property
    def next_month(self) -> date | None:
        """Month after the current page; None after date.max."""
        return self._month_or_none(self.page + 1)

    def settle(self, page: int) -> bool:
        """Move to `page` after a swipe settles. Returns True if the page changed."""
        new_page = self._clamp(page)
        changed = new_page != self.page
        self.page = new_page
        return changed

    def next_page(self) -> bool:
        if self.is_last_page():
            return False
        return self.settle(self.page + 1)

    def previous_page(self) -> bool:
        if self.is_first_page():
            return False
        return self.settle(self.page - 1)

    def show(self, day: date) -> bool:
        """Move to the page containing `day`."""
        return self.settle(self.page_for(day))
