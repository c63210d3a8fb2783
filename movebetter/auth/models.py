"""Session model definitions."""

from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
    ADMIN = "admin"
    PATIENT = "patient"


class AccountKind(str, Enum):
    ADMIN = "admin"
    PATIENT = "patient"


class SessionUser(BaseModel):
    """Represents the signed-in user."""
    id: str
    name: str
    email: str
    role: Role


class AuthReply(BaseModel):
    success: bool = False
    user: SessionUser | None = None
    token: str | None = None
    error: str | None = None
    network_failure: bool = False


class AuthOutcome(BaseModel):
    success: bool
    error: str | None = None
