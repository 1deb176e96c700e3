from fastapi import APIRouter, Depends, Request
from app.modules.auth.schemas import (
    LoginRequest, SignUpRequest, TokenResponse, SignUpResponse,
    ForgotPasswordRequest, MessageResponse
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_session_auth_service, get_current_token, get_current_user
from app.core.rate_limit import limiter
from app.config import settings
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignUpResponse, status_code=201)
@limiter.limit(settings.auth_rate_limit)
async def sign_up(
    request: Request,
    sign_up_data: SignUpRequest,
    service: AuthService = Depends(get_session_auth_service)
):
    """Register a new user"""
    return service.sign_up(sign_up_data)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_session_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit(settings.auth_rate_limit)
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    service: AuthService = Depends(get_session_auth_service)
):
    """Request a password reset email"""
    return MessageResponse(message=service.forgot_password(body.email))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: Dict = Depends(get_current_user),
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout the current session"""
    service.logout(token)
    return MessageResponse(message="Logged out successfully")


@router.get("/me")
async def me(current_user: Dict = Depends(get_current_user)):
    """Get current authenticated user"""
    return current_user
