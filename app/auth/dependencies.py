# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Every admin request re-validates its bearer token with Supabase Auth;
# nothing about the caller is cached between requests.
#
# Usage:
#   from app.auth import require_admin, AuthUser
#
#   @router.get("/protected")
#   async def protected(admin: AuthUser = Depends(require_admin)):
#       return {"user_id": admin.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import AuthError

from app.auth.models import AuthUser
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing tokens are reported by get_current_user
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Resolve the caller from the bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Asks Supabase Auth who the token belongs to
    3. Returns an AuthUser with id, email, username and role

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Unauthorized: No token provided.")

    client = SupabaseClient.get_client()

    try:
        response = client.auth.get_user(credentials.credentials)
    except AuthError as e:
        logger.warning(f"Token rejected by Supabase Auth: {e}")
        raise _unauthorized("Unauthorized: Invalid token.")

    user = getattr(response, "user", None) if response else None
    if user is None:
        logger.warning("Supabase Auth returned no user for token")
        raise _unauthorized("Unauthorized: Invalid token.")

    auth_user = AuthUser.from_supabase_user(user)
    logger.debug(f"Authenticated user: {auth_user.id}")
    return auth_user


async def require_admin(
    user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """
    Allow the request only for principals with the "admin" role.

    Raises:
        HTTPException: 401 from get_current_user, 403 if not an admin
    """
    if not user.is_admin:
        logger.warning(f"Non-admin user {user.id} attempted an admin request")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: User does not have admin privileges.",
        )
    return user
