"""Pydantic schemas for registration, login, and the current user.

Request fields are optional at the schema level so that a missing
email or password yields the service's 400 message rather than a
generic body error.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from lottohist.schemas._time import as_utc


class Credentials(BaseModel):
    """Body of POST /api/register and POST /api/login."""

    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    id: int
    email: str

    model_config = {"from_attributes": True}


class UserProfile(PublicUser):
    """User record without the password hash."""

    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class AuthResponse(BaseModel):
    message: str
    token: str
    user: PublicUser


class MeResponse(BaseModel):
    user: UserProfile
