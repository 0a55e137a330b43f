# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

ADMIN_ROLE = "admin"


class AuthUser(BaseModel):
    """
    Principal returned by Supabase Auth for a bearer token.

    The role and username come from the user's metadata; only the
    "admin" role is privileged.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @classmethod
    def from_supabase_user(cls, user: Any) -> "AuthUser":
        """Build from a supabase `User` object."""
        metadata = getattr(user, "user_metadata", None) or {}
        return cls(
            id=user.id,
            email=getattr(user, "email", None),
            username=metadata.get("username"),
            role=metadata.get("role"),
        )


class LoginRequest(BaseModel):
    """
    Body of POST /api/admin/login.

    `username` is the admin's email address. Both fields are optional here
    so a missing one is reported as a 400 rather than a schema error.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class AdminSummary(BaseModel):
    """Public summary of the signed-in admin."""
    id: UUID
    username: Optional[str] = None
    email: Optional[str] = None


class LoginResponse(BaseModel):
    """Bearer token plus the admin summary."""
    token: str
    admin: AdminSummary


class VerifyResponse(BaseModel):
    """Response of GET /api/admin/verify."""
    valid: bool = True
    admin: AdminSummary
