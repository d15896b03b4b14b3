from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest

from gift_planner.core import timestamps
from gift_planner.core.timestamps import parse_timestamp, to_epoch_millis, to_iso

NEW_YEAR = 1735689600000  # 2025-01-01T00:00:00Z


@pytest.mark.parametrize("value", [
    "2025-01-01T00:00:00Z",
    "2025-01-01T00:00:00.000Z",
    "2025-01-01T01:00:00+01:00",
    datetime(2025, 1, 1, tzinfo=timezone.utc),
    datetime(2025, 1, 1),
    {"seconds": 1735689600, "nanoseconds": 0},
    {"_seconds": 1735689600, "_nanoseconds": 0},
    NEW_YEAR,
    str(NEW_YEAR),
])
def test_parse_timestamp_shapes(value):
    assert parse_timestamp(value) == NEW_YEAR


def test_milliseconds_are_kept():
    assert parse_timestamp("2025-01-01T00:00:00.123Z") == NEW_YEAR + 123
    assert parse_timestamp({"seconds": 1735689600, "nanoseconds": 456_000_000}) == NEW_YEAR + 456


def test_seconds_are_not_rescaled():
    assert parse_timestamp(1735689600) == 1735689600


def test_sdk_timestamp_objects():
    proto = mock.Mock(spec=["ToDatetime"])
    proto.ToDatetime.return_value = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp(proto) == NEW_YEAR


@pytest.mark.parametrize("value", [None, "", "not a date", True, {"foo": 1}, object()])
def test_unparsable_values(value):
    assert parse_timestamp(value) is None


def test_to_epoch_millis_defaults_to_now():
    with mock.patch.object(timestamps, "now_millis", return_value=42):
        assert to_epoch_millis(None) == 42
        assert to_epoch_millis("garbage") == 42
    assert to_epoch_millis("2025-01-01T00:00:00Z") == NEW_YEAR


def test_to_iso():
    assert to_iso(NEW_YEAR) == "2025-01-01T00:00:00Z"
    assert parse_timestamp(to_iso(NEW_YEAR + 5)) == NEW_YEAR + 5


def test_offset_datetime():
    value = datetime(2025, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
    assert parse_timestamp(value) == NEW_YEAR


def test_fraction_digits_of_any_length():
    assert parse_timestamp("2025-01-01T00:00:00.1234Z") == NEW_YEAR + 123
    assert parse_timestamp("2025-01-01T00:00:00.5+00:00") == NEW_YEAR + 500


@pytest.mark.parametrize("value", [
    "1e400",
    "inf",
    "nan",
    float("inf"),
    float("-inf"),
    float("nan"),
    1e17,
    10 ** 30,
    "10000-01-01T00:00:00Z",
    {"seconds": float("inf")},
    {"seconds": 10 ** 20},
])
def test_non_finite_and_out_of_range_values(value):
    assert parse_timestamp(value) is None


def test_out_of_range_defaults_to_now():
    with mock.patch.object(timestamps, "now_millis", return_value=42):
        assert to_epoch_millis("1e400") == 42
        assert to_epoch_millis(1e17) == 42


def test_range_bounds():
    assert parse_timestamp(timestamps.MAX_MILLIS) == timestamps.MAX_MILLIS
    assert parse_timestamp(timestamps.MAX_MILLIS + 1) is None
    assert to_iso(timestamps.MIN_MILLIS).startswith("0001-01-01T00:00:00")
    with pytest.raises(ValueError):
        timestamps.to_datetime(timestamps.MAX_MILLIS + 1)
