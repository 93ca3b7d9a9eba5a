"""Tests for RangePicker."""

from datetime import date, datetime

import pandas as pd
import polars as pl
import pytest

from calrange import (
    ClosedRange,
    DateRangeMode,
    OpenRange,
    RangePicker,
    ValidationError,
    configure_picker,
)


@pytest.fixture
def make_picker(fixed_clock):
    """Build pickers over 2020-2022 without a live refresh timer."""
    pickers = []

    def _make(**kwargs):
        kwargs.setdefault("first_date", date(2020, 1, 1))
        kwargs.setdefault("last_date", date(2022, 12, 31))
        kwargs.setdefault("clock", fixed_clock)
        kwargs.setdefault("auto_refresh", False)
        picker = RangePicker(**kwargs)
        pickers.append(picker)
        return picker

    yield _make
    for picker in pickers:
        picker.close()


class TestConstruction:
    """Test RangePicker construction."""

    def test_open_initial_selection(self, make_picker):
        """Initial start without end opens on the start's month."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))

        assert picker.selection == OpenRange(date(2020, 6, 18))
        assert picker.cursor.current_month == date(2020, 6, 1)
        assert picker.mode is DateRangeMode.DAY

    def test_closed_initial_selection(self, make_picker):
        """Initial range opens on the end's month."""
        picker = make_picker(
            initial_first_date=date(2020, 6, 18),
            initial_last_date=date(2020, 8, 2),
        )

        assert picker.selection == ClosedRange(date(2020, 6, 18), date(2020, 8, 2))
        assert picker.cursor.current_month == date(2020, 8, 1)

    def test_no_initial_selection(self, make_picker):
        """Without a selection the cursor shows today's month."""
        picker = make_picker()

        assert picker.selection is None
        assert picker.cursor.current_month == date(2020, 6, 1)

    def test_inverted_bounds(self, make_picker):
        """first_date after last_date is a configuration error."""
        with pytest.raises(ValidationError):
            make_picker(first_date=date(2022, 1, 1), last_date=date(2021, 1, 1))

    def test_selection_outside_bounds(self, make_picker):
        """Initial selection outside the bounds is rejected."""
        with pytest.raises(ValidationError, match="outside bounds"):
            make_picker(initial_first_date=date(2019, 6, 1))

    def test_end_before_start(self, make_picker):
        """Initial end before start is rejected."""
        with pytest.raises(ValidationError, match="before start"):
            make_picker(
                initial_first_date=date(2020, 6, 18),
                initial_last_date=date(2020, 6, 1),
            )

    def test_end_without_start(self, make_picker):
        """An end alone is rejected."""
        with pytest.raises(ValidationError, match="without initial_first_date"):
            make_picker(initial_last_date=date(2020, 6, 1))

    def test_invalid_week_start(self, make_picker):
        """Week start must be 0..6."""
        with pytest.raises(ValidationError, match="week_start"):
            make_picker(initial_first_date=date(2020, 6, 18), week_start=9)

    def test_invalid_mode(self, make_picker):
        """Mode must be a DateRangeMode."""
        with pytest.raises(ValidationError, match="Unknown mode"):
            make_picker(initial_first_date=date(2020, 6, 18), initial_mode="day")

    def test_week_start_from_config(self, make_picker):
        """Default week start comes from the config."""
        configure_picker(default_week_start=1)
        picker = make_picker(initial_first_date=date(2020, 6, 18))

        assert picker.week_start == 1
        assert picker.month_grid().headers[0] == "Mon"


class TestDayTaps:
    """Test day_tapped event handling."""

    def test_two_taps_make_range(self, make_picker):
        """Start then end produces a closed range."""
        changes = []
        picker = make_picker(on_change=changes.append)

        picker.day_tapped(date(2020, 6, 18))
        picker.day_tapped(date(2020, 6, 10))

        assert picker.selection == ClosedRange(date(2020, 6, 10), date(2020, 6, 18))
        assert changes == [
            OpenRange(date(2020, 6, 18)),
            ClosedRange(date(2020, 6, 10), date(2020, 6, 18)),
        ]

    def test_tap_on_closed_reopens(self, make_picker):
        """A tap while closed starts a new range."""
        picker = make_picker(
            initial_first_date=date(2020, 6, 10),
            initial_last_date=date(2020, 6, 18),
        )

        assert picker.day_tapped(date(2020, 6, 25)) == OpenRange(date(2020, 6, 25))

    def test_disabled_day_ignored(self, make_picker):
        """Taps on disabled days leave the selection unchanged."""
        changes = []
        picker = make_picker(
            initial_first_date=date(2020, 6, 18),
            selectable_day_predicate=lambda d: d.weekday() < 5,
            on_change=changes.append,
        )

        assert picker.day_tapped(date(2020, 6, 20)) == OpenRange(date(2020, 6, 18))
        assert picker.day_tapped(date(2023, 1, 2)) == OpenRange(date(2020, 6, 18))
        assert changes == []

    def test_datetime_tap(self, make_picker):
        """Time-of-day on a tapped value is ignored."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))
        picker.day_tapped(datetime(2020, 6, 18, 23, 59))

        assert picker.selection == ClosedRange(date(2020, 6, 18), date(2020, 6, 18))


class TestYearTaps:
    """Test year mode."""

    def test_years(self, make_picker):
        """Year list spans the bounds."""
        picker = make_picker(initial_first_date=date(2021, 6, 18))

        assert picker.years() == [2020, 2021, 2022]
        assert picker.initial_year_index() == 1

    def test_year_tap_reopens_and_moves_cursor(self, make_picker):
        """A year tap relocates the start, drops the end and shows its month."""
        picker = make_picker(
            initial_first_date=date(2020, 6, 18),
            initial_last_date=date(2020, 7, 1),
            initial_mode=DateRangeMode.YEAR,
        )

        result = picker.year_tapped(2022)

        assert result == OpenRange(date(2022, 6, 18))
        assert picker.mode is DateRangeMode.DAY
        assert picker.cursor.current_month == date(2022, 6, 1)

    def test_year_tap_reject_policy(self, make_picker):
        """The reject policy surfaces as ValidationError."""
        picker = make_picker(initial_first_date=date(2020, 2, 29), year_day_policy="reject")

        with pytest.raises(ValidationError):
            picker.year_tapped(2021)
        assert picker.selection == OpenRange(date(2020, 2, 29))

    def test_year_tap_without_selection(self, make_picker):
        """Without a selection the year tap relocates today."""
        picker = make_picker()

        assert picker.year_tapped(2021) == OpenRange(date(2021, 6, 15))

    def test_set_mode(self, make_picker):
        """set_mode switches the sub-view."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))
        picker.set_mode(DateRangeMode.YEAR)
        assert picker.mode is DateRangeMode.YEAR


class TestPaging:
    """Test page events."""

    def test_next_and_previous(self, make_picker):
        """Chevrons move one month."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))

        assert picker.next_page_requested() == 6
        assert picker.previous_page_requested() == 5

    def test_bounds_are_noops(self, make_picker):
        """Requests past either end leave the page unchanged."""
        picker = make_picker(initial_first_date=date(2020, 1, 5))
        assert picker.previous_page_requested() == 0

        picker.page_settled(picker.cursor.page_count - 1)
        assert picker.next_page_requested() == picker.cursor.page_count - 1

    def test_page_settled(self, make_picker):
        """Swipes settle on the given page."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))

        assert picker.page_settled(14) == 14
        assert picker.cursor.current_month == date(2021, 3, 1)

    def test_month_grid_follows_page(self, make_picker):
        """month_grid renders the current page with selection and today."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))
        grid = picker.month_grid()

        assert (grid.year, grid.month) == (2020, 6)
        assert grid.cell_for(date(2020, 6, 18)).is_start
        assert grid.cell_for(date(2020, 6, 15)).is_today

    def test_month_frame(self, make_picker):
        """month_frame exports the grid through a backend."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))

        assert isinstance(picker.month_frame(), pd.DataFrame)
        assert isinstance(picker.month_frame(backend="polars"), pl.DataFrame)


class TestConfirm:
    """Test confirm results."""

    def test_confirm_start_only(self, make_picker):
        """Only a start gives a one-element list."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))
        assert picker.confirm() == [date(2020, 6, 18)]

    def test_confirm_range(self, make_picker):
        """A closed range gives [start, end] and calls on_confirm."""
        confirmed = []
        picker = make_picker(
            initial_first_date=date(2020, 6, 10),
            initial_last_date=date(2020, 6, 18),
            on_confirm=confirmed.append,
        )

        assert picker.confirm() == [date(2020, 6, 10), date(2020, 6, 18)]
        assert confirmed == [[date(2020, 6, 10), date(2020, 6, 18)]]

    def test_confirm_nothing_selected(self, make_picker):
        """No selection gives an empty list."""
        assert make_picker().confirm() == []


class TestLifecycle:
    """Test close and the context-manager protocol."""

    def test_close_cancels_refresh(self, fixed_clock):
        """Closing cancels the midnight timer."""
        with RangePicker(
            date(2020, 1, 1),
            date(2022, 12, 31),
            initial_first_date=date(2020, 6, 18),
            clock=fixed_clock,
        ) as picker:
            assert picker._refresher.active
            assert picker.today == date(2020, 6, 15)

        assert picker.closed
        assert not picker._refresher.active

    def test_events_after_close(self, make_picker):
        """Events on a closed picker raise RuntimeError."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))
        picker.close()
        picker.close()

        with pytest.raises(RuntimeError, match="closed"):
            picker.day_tapped(date(2020, 6, 19))
        with pytest.raises(RuntimeError, match="closed"):
            picker.confirm()


class TestSelectionFrame:
    """Test selection_frame export."""

    def test_closed_range_days(self, make_picker):
        """Every day of a closed range is exported."""
        picker = make_picker(
            initial_first_date=date(2020, 6, 10),
            initial_last_date=date(2020, 6, 14),
        )
        df = picker.selection_frame()

        assert len(df) == 5
        assert df["date"].iloc[-1] == pd.Timestamp("2020-06-14")

    def test_open_range_days(self, make_picker):
        """An open range exports only its start."""
        picker = make_picker(initial_first_date=date(2020, 6, 10))
        df = picker.selection_frame(backend="polars")

        assert df["date"].to_list() == [date(2020, 6, 10)]

    def test_nothing_selected(self, make_picker):
        """No selection exports an empty frame."""
        assert len(make_picker().selection_frame()) == 0


class TestTodayChanged:
    """Test the midnight refresh notification."""

    def test_callback_and_grid_follow_midnight(self, timers):
        """Firing the midnight timer notifies and moves the today highlight."""
        now = [datetime(2020, 6, 15, 23, 0)]
        seen = []
        picker = RangePicker(
            date(2020, 1, 1),
            date(2022, 12, 31),
            initial_first_date=date(2020, 6, 18),
            on_today_changed=seen.append,
            clock=lambda: now[0],
            timer_factory=timers,
        )
        try:
            assert picker.month_grid().cell_for(date(2020, 6, 15)).is_today

            now[0] = datetime(2020, 6, 16, 0, 0, 1)
            timers.created[0].function()

            assert seen == [date(2020, 6, 16)]
            assert picker.today == date(2020, 6, 16)
            grid = picker.month_grid()
            assert grid.cell_for(date(2020, 6, 16)).is_today
            assert not grid.cell_for(date(2020, 6, 15)).is_today
        finally:
            picker.close()

    def test_no_callback_after_close(self, timers):
        """A timer racing with close does not notify."""
        seen = []
        picker = RangePicker(
            date(2020, 1, 1),
            date(2022, 12, 31),
            on_today_changed=seen.append,
            clock=lambda: datetime(2020, 6, 15, 23, 0),
            timer_factory=timers,
        )
        picker.close()
        timers.created[0].function()

        assert seen == []
        assert timers.created[0].cancelled


class TestPageFollowsSelection:
    """Test that day taps keep the relevant month in view."""

    def test_backwards_close_shows_end_month(self, make_picker):
        """Closing a range on an earlier month pages back to the end's month."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))
        picker.previous_page_requested()
        assert picker.cursor.current_month == date(2020, 5, 1)

        picker.day_tapped(date(2020, 5, 20))

        assert picker.selection == ClosedRange(date(2020, 5, 20), date(2020, 6, 18))
        assert picker.cursor.current_month == date(2020, 6, 1)

    def test_forward_close_stays_on_end_month(self, make_picker):
        """Closing on a later month keeps that month in view."""
        picker = make_picker(initial_first_date=date(2020, 6, 18))
        picker.next_page_requested()

        picker.day_tapped(date(2020, 7, 2))

        assert picker.cursor.current_month == date(2020, 7, 1)

    def test_reopen_shows_new_start_month(self, make_picker):
        """A tap on a closed range shows the new start's month."""
        picker = make_picker(
            initial_first_date=date(2020, 6, 10),
            initial_last_date=date(2020, 8, 2),
        )
        picker.page_settled(3)

        picker.day_tapped(date(2020, 4, 9))

        assert picker.selection == OpenRange(date(2020, 4, 9))
        assert picker.cursor.current_month == date(2020, 4, 1)
