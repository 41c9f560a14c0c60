import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from src.adapters.clock import SystemClock
from src.adapters.supabase import (
    SupabaseContentRepo,
    SupabaseContentTypeRepo,
    SupabaseIdentityProvider,
    SupabaseMediaRepo,
    SupabaseObjectStorage,
    SupabaseProfileRepo,
    build_client,
)
from src.api.envelope import ApiError
from src.domain.entities import Principal
from src.ports.auth import IdentityProviderPort
from src.ports.errors import PlatformError
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.supabase_url = os.environ.get("SUPABASE_URL", "")
        self.supabase_anon_key = os.environ.get("SUPABASE_ANON_KEY", "")
        self.supabase_service_key = os.environ.get("SUPABASE_SERVICE_KEY") or None
        self.app_env = os.environ.get("APP_ENV", "development")
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
        self.password_reset_redirect_url = (
            os.environ.get("PASSWORD_RESET_REDIRECT_URL") or None
        )
        self.cors_origins = [
            o.strip()
            for o in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
            if o.strip()
        ]
        self.rules_path = Path(os.environ.get("CMS_RULES_PATH", self.base_dir / "rules.yaml"))

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


class ContentTypeRulesAdapter:
    """Adapter to map generic Rules to content type RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.content

    def get_default_fields(self) -> list[dict[str, Any]]:
        return [dict(f) for f in self._rules.default_fields]


class MediaRulesAdapter:
    """Adapter to map generic Rules to media RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.media

    def get_allowed_mime_types(self) -> list[str]:
        return self._rules.allowlist_mime_types

    def get_max_upload_bytes(self) -> int:
        return self._rules.max_upload_bytes


class AuthRulesAdapter:
    """Adapter to map generic Rules to auth RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.auth

    def get_min_password_length(self) -> int:
        return self._rules.min_password_length

    def get_profile_fields(self) -> list[str]:
        return self._rules.profile_fields


def get_content_type_rules(rules: Rules = Depends(get_rules)) -> ContentTypeRulesAdapter:
    return ContentTypeRulesAdapter(rules)


def get_media_rules(rules: Rules = Depends(get_rules)) -> MediaRulesAdapter:
    return MediaRulesAdapter(rules)


def get_auth_rules(rules: Rules = Depends(get_rules)) -> AuthRulesAdapter:
    return AuthRulesAdapter(rules)


# --- Pagination ---
class Page:
    def __init__(self, limit: int, offset: int):
        self.limit = limit
        self.offset = offset


def get_page(
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    rules: Rules = Depends(get_rules),
) -> Page:
    if limit is None:
        limit = rules.pagination.default_limit
    return Page(limit=min(limit, rules.pagination.max_limit), offset=offset)


# --- Platform client (one per request) ---
bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


def get_platform_client(
    token: str | None = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings),
) -> Client:
    """Client scoped to the caller; row-level security sees their token."""
    return build_client(settings.supabase_url, settings.supabase_anon_key, token)


# --- Repos ---
def get_content_repo(client: Client = Depends(get_platform_client)) -> SupabaseContentRepo:
    return SupabaseContentRepo(client)


def get_content_type_repo(
    client: Client = Depends(get_platform_client),
) -> SupabaseContentTypeRepo:
    return SupabaseContentTypeRepo(client)


def get_media_repo(client: Client = Depends(get_platform_client)) -> SupabaseMediaRepo:
    return SupabaseMediaRepo(client)


def get_profile_repo(client: Client = Depends(get_platform_client)) -> SupabaseProfileRepo:
    return SupabaseProfileRepo(client)


def get_object_storage(
    client: Client = Depends(get_platform_client),
    rules: Rules = Depends(get_rules),
) -> SupabaseObjectStorage:
    return SupabaseObjectStorage(client, bucket=rules.media.bucket)


def get_identity_provider(
    client: Client = Depends(get_platform_client),
) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(client)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# --- Auth ---
def get_current_user(
    token: str | None = Depends(get_bearer_token),
    identity: IdentityProviderPort = Depends(get_identity_provider),
) -> Principal:
    """Resolve the bearer token with the identity provider."""
    if not token:
        raise ApiError(401, "User not authenticated", code="unauthenticated")

    try:
        user = identity.get_user(token)
    except PlatformError as e:
        logger.warning("Token verification failed upstream: %s", e.message)
        raise ApiError(400, e.message, code="upstream_error", details=e.details) from e

    if user is None:
        raise ApiError(401, "Invalid token", code="unauthenticated")

    return Principal(user=user, token=token)
