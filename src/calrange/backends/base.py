"""Abstract backend protocol for DataFrame export."""

from datetime import date
from typing import Protocol, TypeVar

from calrange.grid import MonthGrid

DF = TypeVar("DF", covariant=True)


class Backend(Protocol[DF]):
    """Protocol defining the DataFrame exports a backend provides."""

    def grid_frame(self, grid: MonthGrid) -> DF:
        """One row per week, one column per weekday header, day numbers or null."""
        ...

    def days_frame(self, days: list[date]) -> DF:
        """One row per day with a `date` column and a `weekday` column (0 = Sunday)."""
        ...
