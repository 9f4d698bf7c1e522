"""
Clock configuration.

Fixes the drift tolerance, the widths of the packed time and counter fields,
the field separator, and the pluggable time functions. The physical time
source is the single injection point for deterministic tests.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from hlclock.clock.errors import ConfigError
from hlclock.clock.node import DEFAULT_SEPARATOR

# UTC ISO-8601 with microseconds and a trailing Z, e.g. 2025-02-20T00:45:58.249062Z
TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
TIME_FORMAT_WIDTH = 27

DEFAULT_MAX_CLOCK_DRIFT_MILLIS = 3_600_000  # 1 hour
DEFAULT_COUNTER_HEX_DIGITS = 4


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(t: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def pack_iso_time(t: datetime) -> str:
    return as_utc(t).strftime(TIME_FORMAT)


def unpack_iso_time(s: str) -> datetime:
    return datetime.strptime(s, TIME_FORMAT).replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ClockConfig:
    max_clock_drift_millis: int = DEFAULT_MAX_CLOCK_DRIFT_MILLIS
    counter_hex_digits: int = DEFAULT_COUNTER_HEX_DIGITS
    time_field_width: int = TIME_FORMAT_WIDTH
    separator: str = DEFAULT_SEPARATOR
    physical_time: Callable[[], datetime] = field(default=utc_now, compare=False)
    pack_time: Callable[[datetime], str] = field(default=pack_iso_time, compare=False)
    unpack_time: Callable[[str], datetime] = field(default=unpack_iso_time, compare=False)

    def __post_init__(self):
        if self.counter_hex_digits <= 0:
            raise ConfigError(
                f"counter_hex_digits must be positive, got {self.counter_hex_digits}"
            )
        if self.time_field_width <= 0:
            raise ConfigError(
                f"time_field_width must be positive, got {self.time_field_width}"
            )
        if self.max_clock_drift_millis < 0:
            raise ConfigError(
                f"max_clock_drift_millis must be >= 0, got {self.max_clock_drift_millis}"
            )
        if len(self.separator) != 1:
            raise ConfigError(f"separator must be one character, got {self.separator!r}")

    @property
    def max_counter(self) -> int:
        return 16 ** self.counter_hex_digits - 1

    @property
    def min_packed_length(self) -> int:
        """Time field, separator, counter, separator, and at least one node char."""
        return self.time_field_width + self.counter_hex_digits + 3

    def now(self) -> datetime:
        return as_utc(self.physical_time())

    @classmethod
    def from_settings(cls, settings, **overrides) -> "ClockConfig":
        """Build a config from the application Settings (see hlclock.config.settings)."""
        values = {
            "max_clock_drift_millis": settings.max_clock_drift_millis,
            "counter_hex_digits": settings.counter_hex_digits,
            "separator": settings.separator,
        }
        values.update(overrides)
        return cls(**values)
