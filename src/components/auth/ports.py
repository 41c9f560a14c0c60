from typing import Any, Protocol

from src.ports.auth import IdentityProviderPort

__all__ = ["IdentityProviderPort", "ProfileRepoPort", "RulesPort"]


class ProfileRepoPort(Protocol):
    """User profile rows keyed by user id. Raises PlatformError on failure."""

    def get(self, user_id: str) -> dict[str, Any] | None: ...

    def upsert(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...


class RulesPort(Protocol):
    """Port for auth rules."""

    def get_min_password_length(self) -> int: ...

    def get_profile_fields(self) -> list[str]: ...
