"""
Pydantic models for the Sooner API request/response types.

Wire names are camelCase, matching the stored document. Task and user
bodies allow extra fields: clients may attach anything to a task and it is
stored as sent.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enums
# =============================================================================


class Priority(str, Enum):
    """Task priority, most urgent first."""

    SOONER = "sooner"
    LATER = "later"
    MAYBE_NEVER = "maybe never"


# =============================================================================
# Common Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")


class HealthCheck(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Overall system status")
    version: str = Field(default="0.1.0", description="API version")
    timestamp: datetime = Field(default_factory=datetime.now, description="Check timestamp")
    services: dict[str, str] = Field(default_factory=dict, description="Individual service statuses")


# =============================================================================
# Auth Models
# =============================================================================


class Credentials(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def email_has_at(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value


class SignupRequest(Credentials):
    name: str = Field(..., min_length=1, max_length=200)


class TokenResponse(BaseModel):
    token: str
    userId: str


class ValidateResponse(BaseModel):
    valid: bool = True


class AuthorizationFlags(BaseModel):
    isMegaUser: bool = False
    assistantOn: bool = False
    accessRequested: bool = False


# =============================================================================
# User Models
# =============================================================================


class PartialBody(BaseModel):
    """Body where only the fields actually sent matter, extras included."""

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    def to_fields(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_unset=True, mode="json")
        fields.update(self.model_extra or {})
        return fields


class UserPatch(PartialBody):
    """Partial profile update. Unknown fields are stored as sent."""

    email: str | None = Field(None, min_length=3, max_length=320)
    password: str | None = Field(None, min_length=1)
    name: str | None = Field(None, min_length=1, max_length=200)


class AdminCreateUser(SignupRequest):
    isMegaUser: bool = False
    assistantOn: bool = False


class AdminFlagsPatch(BaseModel):
    isMegaUser: bool | None = None
    assistantOn: bool | None = None
    accessRequested: bool | None = None


# =============================================================================
# Task Models
# =============================================================================


class TaskFields(PartialBody):
    """
    Task fields sent on create or patch.

    Known fields are validated; anything else passes through.
    """

    description: str | None = None
    priority: Priority | None = None
    status: str | None = Field(None, min_length=1)
    updateDate: str | None = None


class TaskListResponse(BaseModel):
    paginationAmount: int = Field(..., ge=0, description="Total number of pages")
    tasks: list[dict[str, Any]] = Field(default_factory=list)


__all__ = [
    "AdminCreateUser",
    "AdminFlagsPatch",
    "AuthorizationFlags",
    "Credentials",
    "ErrorResponse",
    "HealthCheck",
    "PartialBody",
    "Priority",
    "SignupRequest",
    "TaskFields",
    "TaskListResponse",
    "TokenResponse",
    "UserPatch",
    "ValidateResponse",
]
