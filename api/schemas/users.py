"""User account request and response models."""
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from domain.models import UserRole

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
PERSON_NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
AUTH0_SUBJECT_PATTERN = re.compile(r"^[^|\s]+\|\S+$")


def _check_person_name(value: Optional[str], label: str) -> Optional[str]:
    if value is not None and not PERSON_NAME_PATTERN.match(value):
        raise ValueError(f"{label} can only contain letters, spaces, hyphens, and apostrophes")
    return value


class UserCreateRequest(BaseModel):
    """Admin provisioning of an account linked to an identity-provider subject."""

    auth0_user_id: str = Field(..., max_length=100, description="Subject id, e.g. auth0|abc123")
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr = Field(..., max_length=255)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)

    @field_validator("auth0_user_id")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        if not AUTH0_SUBJECT_PATTERN.match(v):
            raise ValueError("Auth0 user ID must have the form provider|id")
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return v

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        return _check_person_name(v, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        return _check_person_name(v, "Last name")


class UserUpdateRequest(BaseModel):
    """Partial profile update; ``version`` is the copy the client last read."""

    email: EmailStr = Field(default=None, max_length=255)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    version: Optional[int] = Field(default=None, ge=1)

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: Optional[str]) -> Optional[str]:
        return _check_person_name(v, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: Optional[str]) -> Optional[str]:
        return _check_person_name(v, "Last name")

    @model_validator(mode="after")
    def at_least_one_field(self):
        if self.email is None and self.first_name is None and self.last_name is None:
            raise ValueError(
                "At least one field (email, first_name, or last_name) must be provided for update"
            )
        return self


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    version: int
    created_at: datetime
    updated_at: datetime
