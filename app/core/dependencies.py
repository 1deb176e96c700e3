"""
Core dependencies for route protection
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_session_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional

# auto_error=False so a missing header is a 401 rather than FastAPI's default
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_session_auth_service(supabase: Client = Depends(get_session_supabase)) -> AuthService:
    """AuthService on a per-request client, for calls that start a session"""
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token not provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Resolve the caller's identity; 401 without a token, 403 when Supabase rejects it"""
    return auth_service.get_current_user(token)
