# ticketdesk/auth/schemas.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from ticketdesk.auth.models import as_utc
from ticketdesk.auth.passwords import MAX_PASSWORD_BYTES

MIN_PASSWORD_LENGTH = 6


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class RegisterIn(Credentials):
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginIn(Credentials):
    pass


class UserOut(BaseModel):
    id: int
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def utc_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)
