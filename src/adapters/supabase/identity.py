"""
Supabase Auth implementation of IdentityProviderPort.
"""

from __future__ import annotations

from typing import Any

from supabase import AuthApiError, Client

from src.adapters.supabase.client import platform_call
from src.domain.entities import AuthSession, AuthUser
from src.ports.errors import PlatformError


def to_auth_user(user: Any) -> AuthUser:
    return AuthUser(
        id=str(user.id),
        email=user.email,
        user_metadata=dict(user.user_metadata or {}),
        created_at=user.created_at,
    )


def to_auth_session(session: Any) -> AuthSession:
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        token_type=session.token_type or "bearer",
        expires_in=session.expires_in,
        expires_at=session.expires_at,
    )


class SupabaseIdentityProvider:
    def __init__(self, client: Client):
        self.client = client

    def sign_up(self, email: str, password: str) -> AuthUser | None:
        with platform_call("Sign up"):
            res = self.client.auth.sign_up({"email": email, "password": password})
        return to_auth_user(res.user) if res.user else None

    def sign_in(self, email: str, password: str) -> tuple[AuthUser, AuthSession]:
        with platform_call("Sign in"):
            res = self.client.auth.sign_in_with_password({"email": email, "password": password})
        if res.user is None or res.session is None:
            raise PlatformError("Invalid login credentials")
        return to_auth_user(res.user), to_auth_session(res.session)

    def sign_out(self, token: str) -> None:
        with platform_call("Sign out"):
            self.client.auth.admin.sign_out(token)

    def get_user(self, token: str) -> AuthUser | None:
        try:
            with platform_call("Verify token"):
                res = self.client.auth.get_user(token)
        except PlatformError as e:
            # Rejected tokens are an answer, not a failure
            if isinstance(e.__cause__, AuthApiError):
                return None
            raise
        if res is None or res.user is None:
            return None
        return to_auth_user(res.user)

    def update_password(self, session: AuthSession, new_password: str) -> AuthUser | None:
        with platform_call("Update password"):
            self.client.auth.set_session(session.access_token, session.refresh_token or "")
            res = self.client.auth.update_user({"password": new_password})
        return to_auth_user(res.user) if res.user else None

    def reset_password_for_email(self, email: str, redirect_to: str | None) -> None:
        options: dict[str, str] = {}
        if redirect_to:
            options["redirect_to"] = redirect_to
        with platform_call("Password reset"):
            self.client.auth.reset_password_for_email(email, options)
