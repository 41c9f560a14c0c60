from typing import Any

from fastapi import APIRouter, Depends, status

from src.api.deps import (
    AuthRulesAdapter,
    Settings,
    get_auth_rules,
    get_current_user,
    get_identity_provider,
    get_profile_repo,
    get_settings,
)
from src.api.envelope import envelope, raise_for_errors
from src.api.schemas import (
    ChangePasswordRequest,
    CredentialsRequest,
    ForgotPasswordRequest,
    ProfileUpdateRequest,
    ResetPasswordRequest,
)
from src.components.auth import (
    ChangePasswordInput,
    ForgotPasswordInput,
    GetMeInput,
    LoginInput,
    LogoutInput,
    ResetPasswordInput,
    SignupInput,
    UpdateProfileInput,
    run_change_password,
    run_forgot_password,
    run_get_me,
    run_login,
    run_logout,
    run_reset_password,
    run_signup,
    run_update_profile,
)
from src.components.auth.ports import IdentityProviderPort, ProfileRepoPort
from src.domain.entities import Principal

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    req: CredentialsRequest,
    identity: IdentityProviderPort = Depends(get_identity_provider),
    rules: AuthRulesAdapter = Depends(get_auth_rules),
) -> dict[str, Any]:
    """Register a new user with the identity provider."""
    result = run_signup(SignupInput(email=req.email, password=req.password), identity, rules)
    raise_for_errors(result.errors)
    return envelope("User created successfully", user=result.user)


@router.post("/login")
def login(
    req: CredentialsRequest,
    identity: IdentityProviderPort = Depends(get_identity_provider),
) -> dict[str, Any]:
    """Sign in and return the provider's session."""
    result = run_login(LoginInput(email=req.email, password=req.password), identity)
    raise_for_errors(result.errors)
    return envelope("Login successful", user=result.user, session=result.session)


@router.post("/logout")
def logout(
    current_user: Principal = Depends(get_current_user),
    identity: IdentityProviderPort = Depends(get_identity_provider),
) -> dict[str, Any]:
    result = run_logout(LogoutInput(token=current_user.token), identity)
    raise_for_errors(result.errors)
    return envelope("Logout successful")


@router.get("/me")
def read_me(
    current_user: Principal = Depends(get_current_user),
    profiles: ProfileRepoPort = Depends(get_profile_repo),
) -> dict[str, Any]:
    result = run_get_me(GetMeInput(user=current_user.user), profiles)
    raise_for_errors(result.errors)
    return envelope("User retrieved successfully", user=result.user, profile=result.profile)


@router.put("/profile")
def update_profile(
    req: ProfileUpdateRequest,
    current_user: Principal = Depends(get_current_user),
    profiles: ProfileRepoPort = Depends(get_profile_repo),
    rules: AuthRulesAdapter = Depends(get_auth_rules),
) -> dict[str, Any]:
    """Update whitelisted profile fields of the current user."""
    inp = UpdateProfileInput(user_id=current_user.id, fields=req.model_dump())
    result = run_update_profile(inp, profiles, rules)
    raise_for_errors(result.errors)
    return envelope("Profile updated successfully", profile=result.profile)


@router.post("/forgot-password")
def forgot_password(
    req: ForgotPasswordRequest,
    identity: IdentityProviderPort = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    inp = ForgotPasswordInput(email=req.email, redirect_to=settings.password_reset_redirect_url)
    result = run_forgot_password(inp, identity)
    raise_for_errors(result.errors)
    return envelope("Password reset email sent")


@router.post("/reset-password")
def reset_password(
    req: ResetPasswordRequest,
    identity: IdentityProviderPort = Depends(get_identity_provider),
    rules: AuthRulesAdapter = Depends(get_auth_rules),
) -> dict[str, Any]:
    """Set a new password with the recovery tokens from the reset link."""
    inp = ResetPasswordInput(
        access_token=req.access_token,
        refresh_token=req.refresh_token,
        password=req.password,
    )
    result = run_reset_password(inp, identity, rules)
    raise_for_errors(result.errors)
    return envelope("Password updated successfully", user=result.user)


@router.post("/change-password")
def change_password(
    req: ChangePasswordRequest,
    current_user: Principal = Depends(get_current_user),
    identity: IdentityProviderPort = Depends(get_identity_provider),
    rules: AuthRulesAdapter = Depends(get_auth_rules),
) -> dict[str, Any]:
    inp = ChangePasswordInput(
        email=current_user.user.email,
        current_password=req.current_password,
        new_password=req.new_password,
    )
    result = run_change_password(inp, identity, rules)
    raise_for_errors(result.errors)
    return envelope("Password changed successfully", user=result.user)
