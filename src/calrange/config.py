"""Module-level configuration for picker defaults."""

import threading
from dataclasses import dataclass
from typing import Literal

from calrange.validation import ValidationError, validate_week_start

YearDayPolicy = Literal["clamp", "reject"]

_YEAR_DAY_POLICIES = ("clamp", "reject")


@dataclass
class PickerConfig:
    """Configuration for picker defaults."""

    default_week_start: int = 0  # Sunday, as in en_US
    year_day_policy: YearDayPolicy = "clamp"


# Module-level singleton
_picker_config: PickerConfig | None = None
_config_lock = threading.Lock()


def get_picker_config() -> PickerConfig:
    """Get the global picker configuration singleton."""
    global _picker_config
    if _picker_config is None:
        with _config_lock:
            if _picker_config is None:
                _picker_config = PickerConfig()
    return _picker_config


def configure_picker(
    default_week_start: int | None = None,
    year_day_policy: YearDayPolicy | None = None,
) -> None:
    """Configure default picker settings.

    Args:
        default_week_start: Week start used by pickers created without an
            explicit one. 0 = Sunday ... 6 = Saturday.
        year_day_policy: What to do when a year tap moves the start onto a
            day that does not exist in the target year (Feb 29 in a
            non-leap year). "clamp" moves it to the last day of the month,
            "reject" raises ValidationError.

    Example:
        from calrange import configure_picker

        # European locale, strict year relocation
        configure_picker(default_week_start=1, year_day_policy="reject")
    """
    if default_week_start is not None:
        validate_week_start(default_week_start)
    if year_day_policy is not None and year_day_policy not in _YEAR_DAY_POLICIES:
        raise ValidationError(f"Unknown year_day_policy: {year_day_policy}")

    config = get_picker_config()
    with _config_lock:
        if default_week_start is not None:
            config.default_week_start = default_week_start
        if year_day_policy is not None:
            config.year_day_policy = year_day_policy


def get_default_week_start() -> int:
    """Get the default week start."""
    return get_picker_config().default_week_start


def get_year_day_policy() -> YearDayPolicy:
    """Get the policy applied when relocating the start to another year."""
    return get_picker_config().year_day_policy


def reset_picker_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _picker_config
    with _config_lock:
        _picker_config = PickerConfig()
