"""Polars backend implementation."""

from datetime import date

import polars as pl

from calrange.grid import MonthGrid


class PolarsBackend:
    """Backend implementation for polars DataFrames."""

    def grid_frame(self, grid: MonthGrid) -> pl.DataFrame:
        """Export a month grid; polars has no index, so `week` is a column."""
        data: dict[str, list] = {"week": list(range(len(grid.rows)))}
        for col, header in enumerate(grid.headers):
            data[header] = [
                row[col].day if row[col] is not None else None for row in grid.rows
            ]
        schema = {"week": pl.Int64, **{h: pl.Int64 for h in grid.headers}}
        return pl.DataFrame(data, schema=schema)

    def days_frame(self, days: list[date]) -> pl.DataFrame:
        """Export a list of days, e.g. every day of a closed selection."""
        df = pl.DataFrame({"date": days}, schema={"date": pl.Date})
        # polars weekday is ISO (Monday = 1 ... Sunday = 7)
        return df.with_columns((pl.col("date").dt.weekday() % 7).cast(pl.Int64).alias("weekday"))
