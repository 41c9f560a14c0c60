"""
Auth component - Authentication pass-through and user profiles.

Credentials, tokens and sessions are handled by the external identity
provider; this component validates input and shapes the results.
"""

from .component import (
    run_change_password,
    run_forgot_password,
    run_get_me,
    run_login,
    run_logout,
    run_reset_password,
    run_signup,
    run_update_profile,
)
from .models import (
    AuthOutput,
    AuthValidationError,
    ChangePasswordInput,
    ForgotPasswordInput,
    GetMeInput,
    LoginInput,
    LogoutInput,
    ProfileOutput,
    ResetPasswordInput,
    SignupInput,
    UpdateProfileInput,
)
from .ports import IdentityProviderPort, ProfileRepoPort, RulesPort

__all__ = [
    # Entry points
    "run_change_password",
    "run_forgot_password",
    "run_get_me",
    "run_login",
    "run_logout",
    "run_reset_password",
    "run_signup",
    "run_update_profile",
    # Models
    "AuthOutput",
    "AuthValidationError",
    "ChangePasswordInput",
    "ForgotPasswordInput",
    "GetMeInput",
    "LoginInput",
    "LogoutInput",
    "ProfileOutput",
    "ResetPasswordInput",
    "SignupInput",
    "UpdateProfileInput",
    # Ports
    "IdentityProviderPort",
    "ProfileRepoPort",
    "RulesPort",
]
