"""calrange - Date-range picker core: calendar math, range selection and month paging."""

from calrange.backends import PandasBackend, PolarsBackend
from calrange.calendar import (
    add_months,
    days_in_month,
    first_day_offset,
    grid_row_count,
    is_leap_year,
    month_delta,
    month_start,
    weekday_order,
)
from calrange.clock import MidnightRefresher
from calrange.config import (
    PickerConfig,
    configure_picker,
    get_default_week_start,
    get_picker_config,
    get_year_day_policy,
    reset_picker_config,
)
from calrange.grid import DayCell, MonthGrid, build_month_grid
from calrange.logging import configure_logging, get_logger
from calrange.navigation import MonthCursor
from calrange.picker import DateRangeMode, RangePicker
from calrange.selection import (
    ClosedRange,
    DateBounds,
    OpenRange,
    SelectionRange,
    is_selectable,
    make_selection,
    on_day_tapped,
    select_year,
    year_range,
)
from calrange.validation import ValidationError

__all__ = [
    # Primary API - presentation layers drive a RangePicker
    "RangePicker",
    "DateRangeMode",
    # Selection state machine
    "ClosedRange",
    "DateBounds",
    "OpenRange",
    "SelectionRange",
    "is_selectable",
    "make_selection",
    "on_day_tapped",
    "select_year",
    "year_range",
    # Navigation
    "MonthCursor",
    # Calendar math
    "add_months",
    "days_in_month",
    "first_day_offset",
    "grid_row_count",
    "is_leap_year",
    "month_delta",
    "month_start",
    "weekday_order",
    # Grid
    "DayCell",
    "MonthGrid",
    "build_month_grid",
    # Backends
    "PandasBackend",
    "PolarsBackend",
    # Today refresh
    "MidnightRefresher",
    # Logging
    "configure_logging",
    "get_logger",
    # Config
    "PickerConfig",
    "configure_picker",
    "get_default_week_start",
    "get_picker_config",
    "get_year_day_policy",
    "reset_picker_config",
    # Errors
    "ValidationError",
]
__version__ = "0.1.0"
