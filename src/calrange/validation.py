"""Construction-time validation for picker configuration."""

from datetime import date


class ValidationError(ValueError):
    """Raised when picker configuration violates an invariant."""
    pass


def validate_bounds(first_date: date, last_date: date) -> None:
    """Validate the selectable universe.

    Raises:
        ValidationError: If first_date is after last_date
    """
    if first_date > last_date:
        raise ValidationError(
            f"first_date {first_date.isoformat()} is after last_date {last_date.isoformat()}"
        )


def validate_selection(
    start: date,
    end: date | None,
    first_date: date,
    last_date: date,
) -> None:
    """Validate a selection against the bounds it lives in.

    Checks:
    1. start lies within [first_date, last_date]
    2. end, when given, lies within the bounds and is not before start

    Raises:
        ValidationError: If validation fails
    """
    if not first_date <= start <= last_date:
        raise ValidationError(
            f"start {start.isoformat()} outside bounds "
            f"[{first_date.isoformat()}, {last_date.isoformat()}]"
        )
    if end is None:
        return
    if not first_date <= end <= last_date:
        raise ValidationError(
            f"end {end.isoformat()} outside bounds "
            f"[{first_date.isoformat()}, {last_date.isoformat()}]"
        )
    if end < start:
        raise ValidationError(
            f"end {end.isoformat()} is before start {start.isoformat()}"
        )


def validate_week_start(week_start: int) -> None:
    """Validate a week-start index (0 = Sunday ... 6 = Saturday)."""
    if isinstance(week_start, bool) or not isinstance(week_start, int):
        raise ValidationError(f"week_start must be an int, got {week_start!r}")
    if not 0 <= week_start <= 6:
        raise ValidationError(f"week_start must be in 0..6, got {week_start}")
