"""Pandas backend implementation."""

from datetime import date

import pandas as pd

from calrange.grid import MonthGrid


class PandasBackend:
    """Backend implementation for pandas DataFrames."""

    def grid_frame(self, grid: MonthGrid) -> pd.DataFrame:
        """Export a month grid with a `week` index and nullable Int64 day columns."""
        data = {
            header: pd.array(
                [row[col].day if row[col] is not None else None for row in grid.rows],
                dtype="Int64",
            )
            for col, header in enumerate(grid.headers)
        }
        df = pd.DataFrame(data)
        df.index.name = "week"
        return df

    def days_frame(self, days: list[date]) -> pd.DataFrame:
        """Export a list of days, e.g. every day of a closed selection."""
        if not days:
            return pd.DataFrame({
                "date": pd.Series([], dtype="datetime64[ns]"),
                "weekday": pd.Series([], dtype="int64"),
            })
        dates = pd.to_datetime(days)
        return pd.DataFrame({
            "date": dates,
            # pandas weekday is Monday = 0; shift to Sunday = 0
            "weekday": (dates.dayofweek + 1) % 7,
        })
