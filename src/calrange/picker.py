"""Date-range picker: owns the selection, month cursor and today refresh."""

import threading
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Callable

from calrange.backends import BackendName, get_backend
from calrange.clock import MidnightRefresher
from calrange.config import YearDayPolicy, get_default_week_start
from calrange.grid import MonthGrid, build_month_grid
from calrange.logging import get_logger
from calrange.navigation import MonthCursor
from calrange.selection import (
    DateBounds,
    OpenRange,
    SelectableDayPredicate,
    SelectionRange,
    initial_year_offset,
    is_selectable,
    make_selection,
    on_day_tapped,
    select_year,
    year_range,
)
from calrange.utils import as_date
from calrange.validation import ValidationError, validate_week_start


class DateRangeMode(Enum):
    """Which sub-view of the picker is active."""

    DAY = "day"
    YEAR = "year"


class RangePicker:
    """Pick a start date, then an end date, then confirm.

    A presentation layer renders `month_grid()` and `years()`, forwards user
    interaction through the event methods and re-renders from `selection`
    and `cursor`. Events are handled synchronously on the caller's thread.
    """

    def __init__(
        self,
        first_date: date,
        last_date: date,
        initial_first_date: date | None = None,
        initial_last_date: date | None = None,
        selectable_day_predicate: SelectableDayPredicate | None = None,
        week_start: int | None = None,
        initial_mode: DateRangeMode = DateRangeMode.DAY,
        on_change: Callable[[SelectionRange], None] | None = None,
        on_confirm: Callable[[list[date]], None] | None = None,
        on_today_changed: Callable[[date], None] | None = None,
        year_day_policy: YearDayPolicy | None = None,
        clock: Callable[[], datetime] = datetime.now,
        auto_refresh: bool = True,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer,
    ) -> None:
        """Initialize a RangePicker.

        Args:
            first_date: Earliest selectable day.
            last_date: Latest selectable day.
            initial_first_date: Start of the initial selection, or None to
                open with nothing selected.
            initial_last_date: End of the initial selection, or None to open
                with only a start chosen.
            selectable_day_predicate: Extra filter; days it rejects are
                disabled.
            week_start: First weekday column, 0 = Sunday ... 6 = Saturday.
                Defaults to the configured default week start.
            initial_mode: Sub-view shown first.
            on_change: Called with the new selection after each change.
            on_confirm: Called with the result of confirm().
            on_today_changed: Called with the new date after local midnight
                passes. Runs on the refresh timer thread; marshal it onto
                the presentation layer's event loop before redrawing.
            year_day_policy: Overrides the configured policy for relocating
                the start onto a year where its day does not exist.
            clock: Source of the current local time.
            auto_refresh: Start the midnight timer that keeps `today` current.
            timer_factory: Builds the one-shot midnight timer.

        Raises:
            ValidationError: If the bounds, initial selection, week start or
                mode are invalid.
        """
        self._bounds = DateBounds(first_date, last_date)
        self._selection: SelectionRange | None = None
        if initial_first_date is not None:
            self._selection = make_selection(
                initial_first_date, initial_last_date, self._bounds
            )
        elif initial_last_date is not None:
            raise ValidationError("initial_last_date given without initial_first_date")

        if week_start is None:
            week_start = get_default_week_start()
        validate_week_start(week_start)
        self._week_start = week_start

        if not isinstance(initial_mode, DateRangeMode):
            raise ValidationError(f"Unknown mode: {initial_mode!r}")
        self._mode = initial_mode

        self._predicate = selectable_day_predicate
        self._on_change = on_change
        self._on_confirm = on_confirm
        self._year_day_policy = year_day_policy
        self._closed = False

        self._on_today_changed = on_today_changed
        self._refresher = MidnightRefresher(
            on_refresh=self._handle_today_changed, now=clock, timer_factory=timer_factory
        )
        if auto_refresh:
            self._refresher.start()

        if self._selection is not None:
            self._cursor = MonthCursor.for_selection(self._bounds, self._selection)
        else:
            self._cursor = MonthCursor(self._bounds)
            self._cursor.show(self.today)

        self._log = get_logger(__name__).bind(
            first_date=self._bounds.first_date,
            last_date=self._bounds.last_date,
        )
        self._log.info(
            "picker_created",
            selection=self._describe(self._selection),
            week_start=self._week_start,
            page=self._cursor.page,
            page_count=self._cursor.page_count,
        )

    # -- state exposed to the presentation layer --

    @property
    def bounds(self) -> DateBounds:
        return self._bounds

    @property
    def selection(self) -> SelectionRange | None:
        return self._selection

    @property
    def cursor(self) -> MonthCursor:
        return self._cursor

    @property
    def mode(self) -> DateRangeMode:
        return self._mode

    @property
    def week_start(self) -> int:
        return self._week_start

    @property
    def today(self) -> date:
        return self._refresher.today

    @property
    def closed(self) -> bool:
        return self._closed

    def is_selectable(self, day: date) -> bool:
        return is_selectable(as_date(day), self._bounds, self._predicate)

    def month_grid(self, page: int | None = None) -> MonthGrid:
        """Grid for `page`, defaulting to the page currently shown."""
        month = self._cursor.month_for_page(self._cursor.page if page is None else page)
        return build_month_grid(
            month.year,
            month.month,
            self._week_start,
            self._bounds,
            selection=self._selection,
            predicate=self._predicate,
            today=self.today,
        )

    def month_frame(self, page: int | None = None, backend: BackendName = "pandas") -> Any:
        """Month grid as a DataFrame of the given backend."""
        return get_backend(backend).grid_frame(self.month_grid(page))

    def selection_frame(self, backend: BackendName = "pandas") -> Any:
        """Every selected day as a DataFrame; empty while nothing is selected."""
        days: list[date] = []
        if self._selection is not None:
            end = self._selection.end or self._selection.start
            days = [
                self._selection.start + timedelta(days=i)
                for i in range((end - self._selection.start).days + 1)
            ]
        return get_backend(backend).days_frame(days)

    def years(self) -> list[int]:
        return year_range(self._bounds)

    def initial_year_index(self) -> int:
        """Index into years() that the year list should scroll to."""
        if self._selection is None:
            return self._bounds.clamp(self.today).year - self._bounds.first_date.year
        return initial_year_offset(self._bounds, self._selection)

    # -- events --

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("picker is closed")

    def _handle_today_changed(self, today: date) -> None:
        if self._closed:
            return
        if self._on_today_changed is not None:
            self._on_today_changed(today)

    def _set_selection(self, selection: SelectionRange) -> None:
        self._selection = selection
        self._log.debug("range_changed", selection=self._describe(selection))
        if self._on_change is not None:
            self._on_change(selection)

    def day_tapped(self, day: date) -> SelectionRange | None:
        """Apply a tap on a day cell. Taps on disabled days are ignored."""
        self._check_open()
        day = as_date(day)
        if not self.is_selectable(day):
            self._log.debug("disabled_day_ignored", day=day)
            return self._selection
        self._log.debug("day_tapped", day=day)
        if self._selection is None:
            self._set_selection(OpenRange(day))
        else:
            self._set_selection(on_day_tapped(self._selection, day))
        # Closed ranges show the end's month, open ones the start's
        anchor = self._selection.end or self._selection.start
        if self._cursor.show(anchor):
            self._log.debug("page_changed", page=self._cursor.page)
        return self._selection

    def year_tapped(self, year: int) -> SelectionRange:
        """Move the start to `year`, reopen the range and return to day mode."""
        self._check_open()
        current = self._selection or OpenRange(self._bounds.clamp(self.today))
        selection = select_year(current, year, self._bounds, self._year_day_policy)
        self._log.info("year_selected", year=year, start=selection.start)
        self._mode = DateRangeMode.DAY
        self._cursor.show(selection.start)
        self._set_selection(selection)
        return self._selection

    def set_mode(self, mode: DateRangeMode) -> None:
        self._check_open()
        if not isinstance(mode, DateRangeMode):
            raise ValidationError(f"Unknown mode: {mode!r}")
        self._mode = mode

    def page_settled(self, index: int) -> int:
        self._check_open()
        if self._cursor.settle(index):
            self._log.debug("page_changed", page=self._cursor.page)
        return self._cursor.page

    def next_page_requested(self) -> int:
        self._check_open()
        if self._cursor.next_page():
            self._log.debug("page_changed", page=self._cursor.page)
        return self._cursor.page

    def previous_page_requested(self) -> int:
        self._check_open()
        if self._cursor.previous_page():
            self._log.debug("page_changed", page=self._cursor.page)
        return self._cursor.page

    def confirm(self) -> list[date]:
        """Return [], [start] or [start, end] and hand it to on_confirm."""
        self._check_open()
        result = self._selection.as_list() if self._selection is not None else []
        self._log.info("picker_confirmed", days=result)
        if self._on_confirm is not None:
            self._on_confirm(result)
        return result

    # -- lifecycle --

    def close(self) -> None:
        """Tear down the picker and cancel the midnight refresh."""
        if self._closed:
            return
        self._refresher.cancel()
        self._closed = True
        self._log.debug("picker_closed")

    def __enter__(self) -> "RangePicker":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @staticmethod
    def _describe(selection: SelectionRange | None) -> dict[str, str | None] | None:
        if selection is None:
            return None
        return {
            "start": selection.start.isoformat(),
            "end": selection.end.isoformat() if selection.end is not None else None,
        }
