from typing import Protocol

from src.domain.entities import AuthSession, AuthUser


class IdentityProviderPort(Protocol):
    """
    External identity provider. Methods raise PlatformError on failure.

    Token issuance, refresh and verification all happen on the provider.
    """

    def sign_up(self, email: str, password: str) -> AuthUser | None: ...

    def sign_in(self, email: str, password: str) -> tuple[AuthUser, AuthSession]: ...

    def sign_out(self, token: str) -> None: ...

    def get_user(self, token: str) -> AuthUser | None:
        """Resolve a bearer token to a user, None if the token is invalid."""
        ...

    def update_password(self, session: AuthSession, new_password: str) -> AuthUser | None:
        """Change the password of the user owning session."""
        ...

    def reset_password_for_email(self, email: str, redirect_to: str | None) -> None: ...
