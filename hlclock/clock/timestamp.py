"""
HLC timestamp value type.

A timestamp is the triple (logical_time, counter, node). It is immutable;
every update builds a new instance. Ordering is by logical time, then
counter, then node. Naive logical times are taken to be UTC and stored
as aware datetimes, so any two timestamps compare.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from hlclock.clock.config import as_utc
from hlclock.clock.node import NodeId


@dataclass(frozen=True, order=True)
class Timestamp:
    logical_time: datetime
    counter: int
    node: NodeId

    def __post_init__(self):
        object.__setattr__(self, "logical_time", as_utc(self.logical_time))

    def compare_to(self, other: "Timestamp") -> int:
        if self.logical_time != other.logical_time:
            return -1 if self.logical_time < other.logical_time else 1
        if self.counter != other.counter:
            return -1 if self.counter < other.counter else 1
        return self.node.compare_to(other.node)

    def copy_with(
        self,
        logical_time: Optional[datetime] = None,
        counter: Optional[int] = None,
        node: Optional[NodeId] = None,
    ) -> "Timestamp":
        changes = {}
        if logical_time is not None:
            changes["logical_time"] = logical_time
        if counter is not None:
            changes["counter"] = counter
        if node is not None:
            changes["node"] = node
        return replace(self, **changes)

    def with_logical_time(self, logical_time: datetime) -> "Timestamp":
        return self.copy_with(logical_time=logical_time)

    def with_counter(self, counter: int) -> "Timestamp":
        return self.copy_with(counter=counter)
