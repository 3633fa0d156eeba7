from pydantic import AfterValidator, Field, StrictBool
from typing import Annotated, Optional
from datetime import datetime
from .base import CamelModel


def normalize_email(value: str) -> str:
    return value.strip().lower()


Email = Annotated[str, Field(min_length=3, max_length=255), AfterValidator(normalize_email)]


# Credential payloads; secrets are compared exactly as sent
class Credentials(CamelModel):
    email: Email
    password: str = Field(..., min_length=1)

    class Config:
        str_strip_whitespace = False


class AdminCredentials(Credentials):
    admin_key: str = Field(..., min_length=1)


class GoogleToken(CamelModel):
    token: str = Field(..., min_length=1)


# Account views (never carry the password hash)
class UserResponse(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    department: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


class UserSummary(CamelModel):
    id: int
    email: str
    name: Optional[str] = None


class AdminResponse(CamelModel):
    id: int
    email: str
    role: str
    created_at: Optional[datetime] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)


class UserStatusUpdate(CamelModel):
    is_active: StrictBool
