"""
Hybrid Logical Clock (HLC) engine.

Issues timestamps for local events and outgoing messages, merges timestamps
received from other nodes, and packs/unpacks timestamps for transport.
Logical time never regresses and never trails physical time; the counter
orders events that share one logical time value.

Packed format: "{time}-{counter:0Nx}-{node_id}"
e.g. "2025-02-20T00:45:58.249062Z-0000-node123"

Reference: Kulkarni et al., "Logical Physical Clocks and Consistent
Snapshots in Globally Distributed Databases" (2014).
"""

import logging
import re
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

from hlclock.clock.config import ClockConfig, as_utc
from hlclock.clock.errors import (
    ClockDriftError, ConfigError, CounterOverflowError, NodeMismatchError,
    TimestampFormatError,
)
from hlclock.clock.node import NodeId
from hlclock.clock.timestamp import Timestamp

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
_HEX = re.compile(r"[0-9a-fA-F]+")


class HybridLogicalClock:
    """Thread-safe HLC owned by a single node.

    Every operation reads the current timestamp, computes its successor,
    validates it and commits it under one lock. A failed operation leaves
    the current timestamp unchanged.
    """

    def __init__(
        self,
        node: Union[NodeId, str],
        config: Optional[ClockConfig] = None,
        previous: Optional[Timestamp] = None,
        physical_time: Optional[Callable[[], datetime]] = None,
    ):
        self.node = node if isinstance(node, NodeId) else NodeId(node)
        config = config or ClockConfig()
        if physical_time is not None:
            config = replace(config, physical_time=physical_time)
        self.config = config
        self._lock = threading.Lock()

        if previous is None:
            self._timestamp = self._validate(Timestamp(EPOCH, 0, self.node))
            logger.info("HLC started for node %s", self.node)
            return

        if previous.node != self.node:
            logger.warning(
                "Refusing to resume node %s from a timestamp issued by %s",
                self.node, previous.node,
            )
            raise NodeMismatchError(
                f"Previous timestamp was issued by {previous.node}, not {self.node}"
            )
        self._timestamp = self._validate(previous, reference_time=self.config.now())
        logger.info(
            "HLC resumed for node %s at %s/%d",
            self.node, previous.logical_time.isoformat(), previous.counter,
        )

    @property
    def current(self) -> Timestamp:
        """The latest issued or merged timestamp."""
        with self._lock:
            return self._timestamp

    # ── Local events / send ─────────────────────────────────────────

    def issue_local_event(self) -> Timestamp:
        """Issue a timestamp for a local event."""
        return self._local_event_or_send()

    def send(self) -> Timestamp:
        """Issue a timestamp to attach to an outgoing message."""
        return self._local_event_or_send()

    def issue_local_event_packed(self) -> str:
        return self.pack(self._local_event_or_send())

    def send_packed(self) -> str:
        return self.pack(self._local_event_or_send())

    def _local_event_or_send(self) -> Timestamp:
        with self._lock:
            now = self.config.now()
            current = self._timestamp
            # Equal times count as leading so repeated events stay strictly ordered
            if current.logical_time >= now:
                new = current.with_counter(current.counter + 1)
            else:
                new = current.copy_with(logical_time=now, counter=0)
            return self._commit(new, now)

    # ── Receive ─────────────────────────────────────────────────────

    def receive(self, incoming: Timestamp) -> Timestamp:
        """Merge a timestamp received from another node.

        The result keeps this clock's node id; the remote identity is never
        adopted.
        """
        incoming_time = incoming.logical_time
        with self._lock:
            now = self.config.now()
            current = self._timestamp
            merged = max(now, incoming_time, current.logical_time)

            if merged == current.logical_time and merged == incoming_time:
                counter = max(current.counter, incoming.counter) + 1
            elif merged == current.logical_time:
                counter = current.counter + 1
            elif merged == incoming_time:
                counter = incoming.counter + 1
            else:
                counter = 0

            new = current.copy_with(logical_time=merged, counter=counter)
            return self._commit(new, now)

    def receive_packed(self, packed: str) -> Timestamp:
        return self.receive(self.unpack(packed))

    def receive_packed_and_repack(self, packed: str) -> str:
        return self.pack(self.receive(self.unpack(packed)))

    # ── Pack / unpack ───────────────────────────────────────────────

    def pack(self, timestamp: Timestamp) -> str:
        """Serialize a timestamp: "{time}{sep}{hex counter}{sep}{node}"."""
        cfg = self.config
        if timestamp.counter < 0:
            raise TimestampFormatError(f"Counter must be >= 0, got {timestamp.counter}")
        self._check_counter(timestamp.counter)

        time_str = cfg.pack_time(timestamp.logical_time)
        if len(time_str) != cfg.time_field_width:
            raise ConfigError(
                f"pack_time produced {len(time_str)} characters "
                f"({time_str!r}), expected time_field_width={cfg.time_field_width}"
            )
        counter_str = format(timestamp.counter, "x").zfill(cfg.counter_hex_digits)
        node_str = timestamp.node.pack(cfg.separator)
        return cfg.separator.join((time_str, counter_str, node_str))

    def unpack(self, packed: str) -> Timestamp:
        """Parse a packed timestamp using the fixed field offsets."""
        cfg = self.config
        if len(packed) < cfg.min_packed_length:
            raise TimestampFormatError(
                f"Packed timestamp {packed!r} is shorter than "
                f"{cfg.min_packed_length} characters"
            )

        time_end = cfg.time_field_width
        counter_start = time_end + 1
        counter_end = counter_start + cfg.counter_hex_digits
        if packed[time_end] != cfg.separator or packed[counter_end] != cfg.separator:
            raise TimestampFormatError(
                f"Packed timestamp {packed!r} has no {cfg.separator!r} "
                f"at offsets {time_end} and {counter_end}"
            )

        time_str = packed[:time_end]
        try:
            logical_time = as_utc(cfg.unpack_time(time_str))
        except (ValueError, TypeError, AttributeError) as e:
            raise TimestampFormatError(f"Invalid time field {time_str!r}: {e}") from e

        counter_str = packed[counter_start:counter_end]
        if not _HEX.fullmatch(counter_str):
            raise TimestampFormatError(f"Invalid hex counter {counter_str!r}")
        counter = int(counter_str, 16)
        self._check_counter(counter)

        node = NodeId.from_packed(packed[counter_end + 1:], cfg.separator)
        return Timestamp(logical_time, counter, node)

    # ── Invariants ──────────────────────────────────────────────────

    def _commit(self, new: Timestamp, reference_time: datetime) -> Timestamp:
        """Validate and store new; the caller holds the lock."""
        self._timestamp = self._validate(new, reference_time)
        logger.debug(
            "HLC %s -> %s/%d", self.node, new.logical_time.isoformat(), new.counter,
        )
        return new

    def _validate(
        self, new: Timestamp, reference_time: Optional[datetime] = None,
    ) -> Timestamp:
        self._check_counter(new.counter)
        if reference_time is not None:
            drift_ms = abs(new.logical_time - reference_time) // _ONE_MS
            if drift_ms > self.config.max_clock_drift_millis:
                logger.warning(
                    "Clock drift of %d ms on node %s exceeds %d ms",
                    drift_ms, self.node, self.config.max_clock_drift_millis,
                )
                raise ClockDriftError(
                    f"Logical time drifted from physical time by {drift_ms} ms, "
                    f"more than {self.config.max_clock_drift_millis} ms"
                )
        return new

    def _check_counter(self, counter: int) -> None:
        if counter > self.config.max_counter:
            logger.warning(
                "Counter %d on node %s exceeds %d",
                counter, self.node, self.config.max_counter,
            )
            raise CounterOverflowError(
                f"Counter exceeded the limit of {self.config.max_counter}"
            )
