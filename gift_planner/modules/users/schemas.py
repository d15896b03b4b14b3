from typing import Optional

from pydantic import EmailStr, Field, field_validator

from gift_planner.core.schemas import BaseSchema, Timestamp
from gift_planner.core.timestamps import now_millis


def _normalize_email(email):
    if isinstance(email, str):
        return email.strip() or None
    return email


class User(BaseSchema):
    id: str
    name: str
    email: Optional[EmailStr] = None
    created_at: Timestamp = Field(default_factory=now_millis)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_to_none(cls, email):
        return _normalize_email(email)


class UserCreate(BaseSchema):
    name: str = Field(min_length=1)
    email: EmailStr

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, name):
        return name.strip() if isinstance(name, str) else name


class UserUpdate(BaseSchema):
    name: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_to_none(cls, email):
        return _normalize_email(email)
