"""
hlclock — Hybrid Logical Clocks for causally ordered, wall-clock-close timestamps.

    clock = HybridLogicalClock(NodeId("node123"))
    clock.issue_local_event_packed()   # "2025-02-20T00:45:58.249062Z-0000-node123"
"""

from hlclock.clock import (
    ClockConfig, ClockDriftError, ConfigError, CounterOverflowError, HLCError,
    HybridLogicalClock, NodeId, NodeMismatchError, Timestamp, TimestampFormatError,
)

__version__ = "0.1.0"

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
