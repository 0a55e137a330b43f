# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Admin authentication backed by Supabase Auth.
#
# Usage:
#   from app.auth import require_admin, AuthUser
#
#   @router.get("/protected")
#   async def protected(admin: AuthUser = Depends(require_admin)):
#       return {"user_id": admin.id}
# =============================================================================

from app.auth.dependencies import get_current_user, require_admin
from app.auth.models import AuthUser, LoginRequest, LoginResponse

__all__ = [
    "get_current_user",
    "require_admin",
    "AuthUser",
    "LoginRequest",
    "LoginResponse",
]
