"""
Exceptions raised by the hybrid logical clock.

None of these are transient: the clock state is left untouched when one is
raised, so the caller decides whether to retry, drop the event or escalate.
"""


class HLCError(Exception):
    """Base class for all clock errors."""


class NodeMismatchError(HLCError):
    """A resumed timestamp was issued by a different node."""


class CounterOverflowError(HLCError):
    """A counter exceeded the configured maximum."""


class ClockDriftError(HLCError):
    """Logical time diverged from physical time beyond the tolerance."""


class TimestampFormatError(HLCError, ValueError):
    """A packed timestamp or node identifier is malformed."""


class ConfigError(HLCError, ValueError):
    """A ClockConfig is internally inconsistent."""
