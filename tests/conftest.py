from datetime import datetime, timezone

import pytest

from hlclock.clock import ClockConfig, HybridLogicalClock, NodeId

FIXED_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeTime:
    """Physical time source that only moves when told to."""

    def __init__(self, t: datetime = FIXED_TIME):
        self.t = t

    def __call__(self) -> datetime:
        return self.t


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def make_clock(fake_time):
    def _make(node="test_node", previous=None, **config_kwargs):
        config = ClockConfig(physical_time=fake_time, **config_kwargs)
        return HybridLogicalClock(NodeId(node), config, previous=previous)
    return _make
