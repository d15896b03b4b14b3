"""
Timestamp normalization.

Backends hand timestamps back in different shapes: ISO strings from the
relational backend, Firestore ``Timestamp`` / ``DatetimeWithNanoseconds``
objects from the document database, plain epoch milliseconds from the local
store, and ``{"seconds": ..., "nanoseconds": ...}`` mappings when a Firestore
timestamp went through JSON. Everything is normalized to epoch milliseconds.

Values outside the range ``datetime`` can represent (including NaN and
infinities) are treated as unparsable so every backend can store what the
API accepts.
"""

import logging
import math
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ISO_DATETIME = TypeAdapter(datetime)


def now_millis() -> int:
    return int(time.time() * 1000)


def _datetime_to_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // timedelta(milliseconds=1)


MIN_MILLIS = _datetime_to_millis(datetime.min)
MAX_MILLIS = _datetime_to_millis(datetime.max)


def _number_to_millis(value: float) -> Optional[int]:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def _parse_string(value: str) -> Optional[int]:
    text = value.strip()
    if not text:
        return None
    # Numeric strings ("1735689600000") come from query params and form fields
    try:
        return _number_to_millis(float(text))
    except ValueError:
        pass
    # pydantic accepts any fraction length and offset form, unlike fromisoformat on 3.10
    try:
        return _datetime_to_millis(_ISO_DATETIME.validate_python(text))
    except (ValidationError, OverflowError):
        return None


def _parse_seconds_mapping(value: Mapping[str, Any]) -> Optional[int]:
    seconds = value.get("seconds", value.get("_seconds"))
    if seconds is None:
        return None
    nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
    try:
        return int(seconds) * 1000 + int(nanos) // 1_000_000
    except (TypeError, ValueError, OverflowError):
        return None


def _parse(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _number_to_millis(value)
    if isinstance(value, datetime):
        # Firestore DatetimeWithNanoseconds is a datetime subclass
        return _datetime_to_millis(value)
    if isinstance(value, str):
        return _parse_string(value)
    if isinstance(value, Mapping):
        return _parse_seconds_mapping(value)
    # google.protobuf Timestamp and other SDK objects
    to_datetime = getattr(value, "ToDatetime", None) or getattr(value, "to_datetime", None)
    if callable(to_datetime):
        try:
            return _datetime_to_millis(to_datetime())
        except (TypeError, ValueError, OverflowError):
            return None
    if hasattr(value, "seconds"):
        return _parse_seconds_mapping(
            {"seconds": value.seconds, "nanoseconds": getattr(value, "nanos", getattr(value, "nanoseconds", 0))}
        )
    return None


def parse_timestamp(value: Any) -> Optional[int]:
    """Return epoch milliseconds for ``value``, or None if it is absent, unparsable or out of range."""
    millis = _parse(value)
    if millis is None or not MIN_MILLIS <= millis <= MAX_MILLIS:
        return None
    return millis


def to_epoch_millis(value: Any) -> int:
    """Normalize ``value`` to epoch milliseconds, defaulting to now when absent or unparsable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        if value is not None:
            logger.debug("Unparsable timestamp %r, defaulting to now", value)
        return now_millis()
    return parsed


def to_datetime(millis: int) -> datetime:
    if not MIN_MILLIS <= millis <= MAX_MILLIS:
        raise ValueError(f"Timestamp {millis} is out of range")
    return _EPOCH + timedelta(milliseconds=millis)


def to_iso(millis: int) -> str:
    return to_datetime(millis).isoformat().replace("+00:00", "Z")
