from hlclock.clock.config import ClockConfig
from hlclock.clock.engine import HybridLogicalClock
from hlclock.clock.errors import (
    ClockDriftError, ConfigError, CounterOverflowError, HLCError,
    NodeMismatchError, TimestampFormatError,
)
from hlclock.clock.node import NodeId
from hlclock.clock.timestamp import Timestamp

__all__ = [
    "ClockConfig",
    "HybridLogicalClock",
    "NodeId",
    "Timestamp",
    "HLCError",
    "NodeMismatchError",
    "CounterOverflowError",
    "ClockDriftError",
    "TimestampFormatError",
    "ConfigError",
]
