from supabase import Client
from app.modules.auth.schemas import LoginRequest, SignUpRequest, TokenResponse, SignUpResponse
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If this email is registered, a password reset link has been sent."


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def sign_up(self, sign_up_data: SignUpRequest) -> SignUpResponse:
        """Register a new user using Supabase Auth"""
        try:
            user_metadata = {}
            if sign_up_data.first_name:
                user_metadata["first_name"] = sign_up_data.first_name
            if sign_up_data.last_name:
                user_metadata["last_name"] = sign_up_data.last_name

            auth_response = self.supabase.auth.sign_up({
                "email": sign_up_data.email,
                "password": sign_up_data.password,
                "options": {
                    "data": user_metadata
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            return SignUpResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or sign_up_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Sign up failed for {sign_up_data.email}: {error_message}")
            raise HTTPException(status_code=500, detail="Could not register user")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid email or password")

            session = auth_response.session
            return TokenResponse(
                access_token=session.access_token,
                refresh_token=getattr(session, "refresh_token", None),
                token_type="bearer",
                expires_in=getattr(session, "expires_in", None),
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            logger.error(f"Login failed for {login_data.email}: {error_message}")
            raise HTTPException(status_code=500, detail="Could not log in")

    def forgot_password(self, email: str) -> str:
        """Send a reset link. Outcome is not revealed to the caller."""
        options = {}
        if settings.password_reset_redirect_url:
            options["redirect_to"] = settings.password_reset_redirect_url
        try:
            self.supabase.auth.reset_password_for_email(email, options)
        except Exception as e:
            logger.warning(f"Password reset request failed for {email}: {e}")
        return FORGOT_PASSWORD_MESSAGE

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve the identity behind a Supabase access token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.info(f"Token rejected by Supabase Auth: {e}")
            raise HTTPException(status_code=403, detail="Invalid or expired token")
        if not user_response or not user_response.user:
            raise HTTPException(status_code=403, detail="Invalid or expired token")
        user = user_response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
            "created_at": user.created_at,
            "updated_at": user.updated_at
        }

    def logout(self, token: str) -> bool:
        """Revoke the refresh tokens of the session behind `token`"""
        try:
            # Access tokens are stateless JWTs; they stay valid until they expire
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
