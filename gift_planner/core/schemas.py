from typing import Annotated, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from gift_planner.core.timestamps import parse_timestamp, to_epoch_millis

# Epoch milliseconds; defaults to now when the backend value is missing or unparsable
Timestamp = Annotated[int, BeforeValidator(to_epoch_millis)]
OptionalTimestamp = Annotated[Optional[int], BeforeValidator(parse_timestamp)]


class BaseSchema(BaseModel):
    """Python attributes are snake_case, the wire format is camelCase"""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        from_attributes=True,
    )

    def to_record(self) -> dict:
        """Storage shape: snake_case keys, unset optional fields dropped"""
        return self.model_dump(exclude_none=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_changes(self, *required: str) -> dict:
        """Fields the caller set, minus explicit nulls on fields that can not be cleared"""
        changes = self.model_dump(exclude_unset=True)
        for field in required:
            if field in changes and changes[field] is None:
                del changes[field]
        return changes


class Message(BaseModel):
    message: str


def _empty_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Invalid url")
    return value


# Kept as the caller's string (pydantic's AnyUrl would rewrite it, e.g. add a trailing slash)
OptionalUrl = Annotated[Optional[str], BeforeValidator(_empty_to_none), AfterValidator(_check_url)]
