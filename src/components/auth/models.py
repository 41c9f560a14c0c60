from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import AuthSession, AuthUser


@dataclass
class AuthValidationError:
    code: str
    message: str
    field: str | None = None
    details: Any = None


@dataclass
class SignupInput:
    email: str | None
    password: str | None


@dataclass
class LoginInput:
    email: str | None
    password: str | None


@dataclass
class LogoutInput:
    token: str


@dataclass
class GetMeInput:
    user: AuthUser


@dataclass
class UpdateProfileInput:
    user_id: str
    fields: dict[str, Any]


@dataclass
class ForgotPasswordInput:
    email: str | None
    redirect_to: str | None = None


@dataclass
class ResetPasswordInput:
    access_token: str | None
    refresh_token: str | None
    password: str | None


@dataclass
class ChangePasswordInput:
    email: str | None
    current_password: str | None
    new_password: str | None


@dataclass
class AuthOutput:
    user: AuthUser | None = None
    session: AuthSession | None = None
    errors: list[AuthValidationError] = field(default_factory=list)
    success: bool = False


@dataclass
class ProfileOutput:
    user: AuthUser | None = None
    profile: dict[str, Any] | None = None
    errors: list[AuthValidationError] = field(default_factory=list)
    success: bool = False
