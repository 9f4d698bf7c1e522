"""Tests for ClockConfig defaults, validation and settings."""

from datetime import datetime, timezone

import pytest

from hlclock.clock import ClockConfig, ConfigError, HybridLogicalClock
from hlclock.clock.config import pack_iso_time, unpack_iso_time
from hlclock.config.settings import Settings


def test_defaults():
    config = ClockConfig()

    assert config.max_clock_drift_millis == 3_600_000
    assert config.counter_hex_digits == 4
    assert config.time_field_width == 27
    assert config.separator == "-"
    assert config.max_counter == 0xFFFF


@pytest.mark.parametrize("digits, expected", [(1, 15), (2, 255), (8, 2**32 - 1)])
def test_max_counter_from_hex_digits(digits, expected):
    assert ClockConfig(counter_hex_digits=digits).max_counter == expected


@pytest.mark.parametrize(
    "kwargs",
    [
        {"counter_hex_digits": 0},
        {"counter_hex_digits": -1},
        {"time_field_width": 0},
        {"max_clock_drift_millis": -1},
        {"separator": ""},
        {"separator": "--"},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigError):
        ClockConfig(**kwargs)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        ClockConfig(counter_hex_digits=0)


def test_default_time_format_is_fixed_width_utc():
    t = datetime(2025, 2, 20, 0, 45, 58, 249062, tzinfo=timezone.utc)

    packed = pack_iso_time(t)

    assert packed == "2025-02-20T00:45:58.249062Z"
    assert len(packed) == 27
    assert unpack_iso_time(packed) == t


def test_whole_seconds_keep_microsecond_field():
    assert pack_iso_time(datetime(2024, 1, 1, tzinfo=timezone.utc)) == "2024-01-01T00:00:00.000000Z"


def test_now_uses_injected_source_and_normalises_to_utc():
    config = ClockConfig(physical_time=lambda: datetime(2024, 1, 1))

    assert config.now() == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert config.now().tzinfo is not None


def test_default_source_is_aware_utc():
    assert ClockConfig().now().utcoffset().total_seconds() == 0


def test_from_settings():
    settings = Settings(
        node_id="node1",
        max_clock_drift_millis=1000,
        counter_hex_digits=2,
        separator="|",
    )

    config = ClockConfig.from_settings(settings)

    assert config.max_clock_drift_millis == 1000
    assert config.counter_hex_digits == 2
    assert config.separator == "|"
    assert config.max_counter == 255


def test_from_settings_overrides():
    fixed = datetime(2024, 1, 1, tzinfo=timezone.utc)

    config = ClockConfig.from_settings(Settings(node_id="n"), physical_time=lambda: fixed)

    assert config.now() == fixed


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("HLC_NODE_ID", "env_node")
    monkeypatch.setenv("HLC_COUNTER_HEX_DIGITS", "6")

    settings = Settings()

    assert settings.node_id == "env_node"
    assert settings.counter_hex_digits == 6


def test_settings_default_node_id_has_no_separator(monkeypatch):
    monkeypatch.delenv("HLC_NODE_ID", raising=False)
    monkeypatch.setattr("platform.node", lambda: "my-host-01")

    assert Settings().node_id == "my_host_01"


def test_from_settings_keeps_default_time_width():
    config = ClockConfig.from_settings(Settings(node_id="n"))

    assert config.time_field_width == 27


def test_time_width_is_not_a_setting(monkeypatch):
    monkeypatch.setenv("HLC_TIME_FIELD_WIDTH", "26")

    clock = HybridLogicalClock("n", ClockConfig.from_settings(Settings()))

    assert len(clock.issue_local_event_packed()) == 27 + 1 + 4 + 1 + 1
