# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Admin sign-in and token verification.
#
# Credentials are checked by Supabase Auth. Each login uses its own
# short-lived client, so no session is kept on the server.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import AuthError

from app.auth.dependencies import require_admin
from app.auth.models import (
    ADMIN_ROLE,
    AdminSummary,
    AuthUser,
    LoginRequest,
    LoginResponse,
    VerifyResponse,
)
from app.exceptions import ValidationFailedError
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest) -> LoginResponse:
    """
    Sign an admin in with email (sent as `username`) and password.

    Returns:
        LoginResponse: Bearer token and admin summary

    Raises:
        400: If email or password is missing
        401: If Supabase rejects the credentials
        403: If the user is not an admin
    """
    if not request.username or not request.password:
        raise ValidationFailedError("Email and password are required.")

    auth_client = SupabaseClient.create_auth_client()

    try:
        response = auth_client.auth.sign_in_with_password({
            "email": request.username,
            "password": request.password,
        })
    except AuthError as e:
        logger.warning(f"Admin login failed for {request.username}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=getattr(e, "message", None) or "Invalid login credentials",
        )

    if response is None or response.user is None or response.session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid login credentials",
        )

    user = AuthUser.from_supabase_user(response.user)
    if user.role != ADMIN_ROLE:
        logger.warning(f"Login by non-admin user {user.id} refused")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: User is not an admin.",
        )

    logger.info(f"Admin {user.email} signed in")
    return LoginResponse(
        token=response.session.access_token,
        admin=AdminSummary(
            id=user.id,
            username=user.username or request.username,
            email=user.email,
        ),
    )


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(
    admin: AuthUser = Depends(require_admin)
) -> VerifyResponse:
    """
    Verify that the current token belongs to an admin.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
        403: If the user is not an admin
    """
    return VerifyResponse(
        admin=AdminSummary(id=admin.id, username=admin.username, email=admin.email),
    )
