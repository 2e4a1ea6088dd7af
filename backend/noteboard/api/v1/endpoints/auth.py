from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from noteboard.api.v1.schemas.auth import (
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
    SignInRequest,
)
from noteboard.core.schemas.auth import AuthResult, SessionUser
from noteboard.dependencies import (
    get_auth_service,
    get_current_user,
    get_session_token,
    rate_limit_by_ip,
)
from noteboard.utils.logging import get_logger

if TYPE_CHECKING:
    from noteboard.core.services.auth_service import AuthService

logger = get_logger(__name__)

# Configure router with authentication-specific settings
router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        429: {"description": "Too many requests"}
    }
)


@router.post("/register", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create an account and sign it in."""
    rate_limit_by_ip(request, "register")
    result = await auth_service.register(payload)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.message)
    return result


@router.post("/login", response_model=AuthResult)
async def login(
    request: Request,
    payload: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Sign in with email and password."""
    rate_limit_by_ip(request, "login")
    result = await auth_service.login(payload.email, payload.password)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str | None = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Sign out the current session. Unknown tokens are ignored."""
    auth_service.logout(token)
    return None


@router.get("/me", response_model=SessionUser)
async def current_user_info(current_user: SessionUser = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=AuthResult)
async def update_profile(
    payload: ProfileUpdate,
    token: str | None = Depends(get_session_token),
    current_user: SessionUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    result = await auth_service.update_profile(current_user, payload, token=token)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.message)
    return result


@router.post("/me/password", response_model=AuthResult)
async def change_password(
    payload: PasswordChange,
    current_user: SessionUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.change_password(current_user, payload.new_password)


@router.delete("/me", response_model=AuthResult)
async def delete_account(
    current_user: SessionUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Delete the signed-in account and end all of its sessions."""
    return await auth_service.delete_account(current_user)
