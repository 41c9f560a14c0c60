import logging
from typing import cast

from src.domain.entities import AuthSession
from src.ports.errors import PlatformError

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

logger = logging.getLogger(__name__)

DEFAULT_MIN_PASSWORD_LENGTH = 6
DEFAULT_PROFILE_FIELDS = ["full_name", "avatar_url", "bio", "website"]


def _upstream(err: PlatformError) -> AuthValidationError:
    return AuthValidationError(code="upstream_error", message=err.message, details=err.details)


def _missing(*names: str) -> AuthValidationError:
    return AuthValidationError(
        code="missing_fields",
        message=f"Missing required fields: {', '.join(names)}",
        field=names[0],
    )


def _check_password(password: str, rules: RulesPort | None) -> AuthValidationError | None:
    min_length = rules.get_min_password_length() if rules else DEFAULT_MIN_PASSWORD_LENGTH
    if len(password) < min_length:
        return AuthValidationError(
            code="invalid_field",
            message=f"Password must be at least {min_length} characters",
            field="password",
        )
    return None


def run_signup(
    inp: SignupInput, identity: IdentityProviderPort, rules: RulesPort | None = None
) -> AuthOutput:
    missing = [n for n, v in (("email", inp.email), ("password", inp.password)) if not v]
    if missing:
        return AuthOutput(errors=[_missing(*missing)])

    email, password = cast(str, inp.email), cast(str, inp.password)
    weak = _check_password(password, rules)
    if weak:
        return AuthOutput(errors=[weak])

    try:
        user = identity.sign_up(email, password)
    except PlatformError as e:
        return AuthOutput(errors=[_upstream(e)])

    return AuthOutput(user=user, success=True)


def run_login(inp: LoginInput, identity: IdentityProviderPort) -> AuthOutput:
    missing = [n for n, v in (("email", inp.email), ("password", inp.password)) if not v]
    if missing:
        return AuthOutput(errors=[_missing(*missing)])

    email, password = cast(str, inp.email), cast(str, inp.password)
    try:
        user, session = identity.sign_in(email, password)
    except PlatformError as e:
        return AuthOutput(errors=[_upstream(e)])

    return AuthOutput(user=user, session=session, success=True)


def run_logout(inp: LogoutInput, identity: IdentityProviderPort) -> AuthOutput:
    try:
        identity.sign_out(inp.token)
    except PlatformError as e:
        return AuthOutput(errors=[_upstream(e)])
    return AuthOutput(success=True)


def run_get_me(inp: GetMeInput, profiles: ProfileRepoPort) -> ProfileOutput:
    """The authenticated user plus their profile row (None if never written)."""
    try:
        profile = profiles.get(inp.user.id)
    except PlatformError as e:
        return ProfileOutput(user=inp.user, errors=[_upstream(e)])
    return ProfileOutput(user=inp.user, profile=profile, success=True)


def run_update_profile(
    inp: UpdateProfileInput, profiles: ProfileRepoPort, rules: RulesPort | None = None
) -> ProfileOutput:
    allowed = rules.get_profile_fields() if rules else DEFAULT_PROFILE_FIELDS

    unknown = sorted(k for k in inp.fields if k not in allowed)
    if unknown:
        return ProfileOutput(
            errors=[
                AuthValidationError(
                    code="invalid_field",
                    message=f"Unknown profile fields: {', '.join(unknown)}",
                    field=unknown[0],
                )
            ]
        )

    if not inp.fields:
        return ProfileOutput(
            errors=[
                AuthValidationError(
                    code="missing_fields",
                    message=f"Provide at least one of: {', '.join(allowed)}",
                )
            ]
        )

    try:
        profile = profiles.upsert(inp.user_id, dict(inp.fields))
    except PlatformError as e:
        return ProfileOutput(errors=[_upstream(e)])

    return ProfileOutput(profile=profile, success=True)


def run_forgot_password(inp: ForgotPasswordInput, identity: IdentityProviderPort) -> AuthOutput:
    if not inp.email:
        return AuthOutput(errors=[_missing("email")])

    try:
        identity.reset_password_for_email(inp.email, inp.redirect_to)
    except PlatformError as e:
        return AuthOutput(errors=[_upstream(e)])
    return AuthOutput(success=True)


def run_reset_password(
    inp: ResetPasswordInput, identity: IdentityProviderPort, rules: RulesPort | None = None
) -> AuthOutput:
    """Set a new password using the recovery tokens from the reset email."""
    missing = [
        n
        for n, v in (
            ("access_token", inp.access_token),
            ("refresh_token", inp.refresh_token),
            ("password", inp.password),
        )
        if not v
    ]
    if missing:
        return AuthOutput(errors=[_missing(*missing)])

    password = cast(str, inp.password)
    weak = _check_password(password, rules)
    if weak:
        return AuthOutput(errors=[weak])

    session = AuthSession(
        access_token=cast(str, inp.access_token), refresh_token=inp.refresh_token
    )
    try:
        user = identity.update_password(session, password)
    except PlatformError as e:
        return AuthOutput(errors=[_upstream(e)])

    return AuthOutput(user=user, success=True)


def run_change_password(
    inp: ChangePasswordInput, identity: IdentityProviderPort, rules: RulesPort | None = None
) -> AuthOutput:
    """Re-authenticate with the current password, then set the new one."""
    missing = [
        n
        for n, v in (
            ("email", inp.email),
            ("current_password", inp.current_password),
            ("new_password", inp.new_password),
        )
        if not v
    ]
    if missing:
        return AuthOutput(errors=[_missing(*missing)])

    email = cast(str, inp.email)
    new_password = cast(str, inp.new_password)
    weak = _check_password(new_password, rules)
    if weak:
        return AuthOutput(errors=[weak])

    try:
        _, session = identity.sign_in(email, cast(str, inp.current_password))
    except PlatformError as e:
        logger.info("Password change rejected for %s: %s", email, e.message)
        return AuthOutput(
            errors=[
                AuthValidationError(
                    code="invalid_field",
                    message="Current password is incorrect",
                    field="current_password",
                )
            ]
        )

    try:
        user = identity.update_password(session, new_password)
    except PlatformError as e:
        return AuthOutput(errors=[_upstream(e)])

    return AuthOutput(user=user, success=True)
