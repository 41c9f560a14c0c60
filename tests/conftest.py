from __future__ import annotations

import builtins
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.api.deps import (
    get_clock,
    get_content_repo,
    get_content_type_repo,
    get_identity_provider,
    get_media_repo,
    get_object_storage,
    get_profile_repo,
    get_rules,
)
from src.api.main import app
from src.domain.entities import (
    AuthSession,
    AuthUser,
    ContentItem,
    ContentTypeDef,
    MediaItem,
)
from src.ports.errors import PlatformError
from src.rules.loader import load_rules

RULES_PATH = Path(__file__).resolve().parent.parent / "rules.yaml"


# --- In-memory platform fakes ---


class FixedClock:
    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


class FakeIdentityProvider:
    """Users by email; bearer tokens issued on sign in."""

    def __init__(self) -> None:
        self.users: dict[str, tuple[AuthUser, str]] = {}
        self.tokens: dict[str, AuthUser] = {}
        self.reset_requests: list[tuple[str, str | None]] = []

    def add_user(self, email: str, password: str = "secret123") -> tuple[AuthUser, str]:
        user = AuthUser(id=str(uuid4()), email=email)
        self.users[email] = (user, password)
        token = f"token-{user.id}"
        self.tokens[token] = user
        return user, token

    def sign_up(self, email: str, password: str) -> AuthUser | None:
        if email in self.users:
            raise PlatformError("User already registered")
        user, _ = self.add_user(email, password)
        return user

    def sign_in(self, email: str, password: str) -> tuple[AuthUser, AuthSession]:
        entry = self.users.get(email)
        if entry is None or entry[1] != password:
            raise PlatformError("Invalid login credentials")
        user = entry[0]
        token = f"token-{user.id}"
        self.tokens[token] = user
        return user, AuthSession(access_token=token, refresh_token=f"refresh-{user.id}")

    def sign_out(self, token: str) -> None:
        self.tokens.pop(token, None)

    def get_user(self, token: str) -> AuthUser | None:
        return self.tokens.get(token)

    def update_password(self, session: AuthSession, new_password: str) -> AuthUser | None:
        user = self.tokens.get(session.access_token)
        if user is None:
            raise PlatformError("Auth session missing!")
        assert user.email is not None
        self.users[user.email] = (user, new_password)
        return user

    def reset_password_for_email(self, email: str, redirect_to: str | None) -> None:
        self.reset_requests.append((email, redirect_to))


class InMemoryContentRepo:
    def __init__(self) -> None:
        self.items: dict[str, ContentItem] = {}
        self.fail_updates = False

    def add(self, item: ContentItem) -> ContentItem:
        item = item.model_copy(update={"id": str(item.id or uuid4())})
        self.items[str(item.id)] = item
        return item

    def get_by_id(self, content_id: str, *, owner_id: str | None = None) -> ContentItem | None:
        item = self.items.get(content_id)
        if item is None or (owner_id is not None and item.owner_id != owner_id):
            return None
        return item

    def list(
        self,
        *,
        owner_id: str | None = None,
        type_id: str | None = None,
        statuses: builtins.list[str] | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> builtins.list[ContentItem]:
        items = [
            i
            for i in self.items.values()
            if (owner_id is None or i.owner_id == owner_id)
            and (type_id is None or str(i.type_id) == type_id)
            and (not statuses or i.status in statuses)
        ]
        items.sort(key=lambda i: i.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)
        return items[offset : offset + limit]

    def list_due(self, now: datetime, *, type_id: str | None = None) -> builtins.list[ContentItem]:
        return [
            i
            for i in self.items.values()
            if i.status == "scheduled"
            and i.scheduled_at is not None
            and i.scheduled_at <= now
            and (type_id is None or str(i.type_id) == type_id)
        ]

    def insert(self, content: ContentItem) -> ContentItem:
        return self.add(content)

    def update(
        self, content_id: str, fields: dict[str, Any], *, owner_id: str | None = None
    ) -> ContentItem | None:
        if self.fail_updates:
            raise PlatformError("update failed")
        item = self.get_by_id(content_id, owner_id=owner_id)
        if item is None:
            return None
        item = item.model_copy(update=fields)
        self.items[content_id] = item
        return item

    def delete(self, content_id: str, *, owner_id: str | None = None) -> bool:
        if self.get_by_id(content_id, owner_id=owner_id) is None:
            return False
        del self.items[content_id]
        return True


class InMemoryContentTypeRepo:
    def __init__(self) -> None:
        self.types: dict[str, ContentTypeDef] = {}

    def get_by_id(self, type_id: str) -> ContentTypeDef | None:
        return self.types.get(type_id)

    def list_visible(self, owner_id: str) -> list[ContentTypeDef]:
        return [t for t in self.types.values() if t.owner_id in (owner_id, None)]

    def insert(self, content_type: ContentTypeDef) -> ContentTypeDef:
        saved = content_type.model_copy(update={"id": str(content_type.id or uuid4())})
        self.types[str(saved.id)] = saved
        return saved

    def update(
        self, type_id: str, fields: dict[str, Any], *, owner_id: str
    ) -> ContentTypeDef | None:
        existing = self.types.get(type_id)
        if existing is None or existing.owner_id != owner_id:
            return None
        saved = ContentTypeDef.model_validate({**existing.model_dump(), **fields})
        self.types[type_id] = saved
        return saved

    def delete(self, type_id: str, *, owner_id: str) -> bool:
        existing = self.types.get(type_id)
        if existing is None or existing.owner_id != owner_id:
            return False
        del self.types[type_id]
        return True


class InMemoryMediaRepo:
    def __init__(self) -> None:
        self.media: dict[str, MediaItem] = {}

    def get_by_id(self, media_id: str, *, owner_id: str) -> MediaItem | None:
        item = self.media.get(media_id)
        if item is None or item.owner_id != owner_id:
            return None
        return item

    def list(self, *, owner_id: str, limit: int = 50, offset: int = 0) -> builtins.list[MediaItem]:
        items = [m for m in self.media.values() if m.owner_id == owner_id]
        return items[offset : offset + limit]

    def insert(self, media: MediaItem) -> MediaItem:
        saved = media.model_copy(update={"id": str(uuid4())})
        self.media[str(saved.id)] = saved
        return saved

    def delete(self, media_id: str, *, owner_id: str) -> bool:
        if self.get_by_id(media_id, owner_id=owner_id) is None:
            return False
        del self.media[media_id]
        return True


class InMemoryProfileRepo:
    def __init__(self) -> None:
        self.profiles: dict[str, dict[str, Any]] = {}

    def get(self, user_id: str) -> dict[str, Any] | None:
        return self.profiles.get(user_id)

    def upsert(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        profile = {**self.profiles.get(user_id, {"id": user_id}), **fields}
        self.profiles[user_id] = profile
        return profile


class InMemoryObjectStorage:
    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        self.objects[key] = (data, content_type)

    def get_public_url(self, key: str) -> str:
        return f"https://storage.example.com/media/{key}"

    def remove(self, keys: list[str]) -> None:
        for key in keys:
            self.objects.pop(key, None)


# --- Fixtures ---


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def content_repo() -> InMemoryContentRepo:
    return InMemoryContentRepo()


@pytest.fixture
def type_repo() -> InMemoryContentTypeRepo:
    return InMemoryContentTypeRepo()


@pytest.fixture
def media_repo() -> InMemoryMediaRepo:
    return InMemoryMediaRepo()


@pytest.fixture
def profile_repo() -> InMemoryProfileRepo:
    return InMemoryProfileRepo()


@pytest.fixture
def storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage()


@pytest.fixture
def api_client(
    clock, identity, content_repo, type_repo, media_repo, profile_repo, storage
):
    """TestClient with every platform dependency replaced by an in-memory fake."""
    rules = load_rules(RULES_PATH)
    app.dependency_overrides[get_rules] = lambda: rules
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_content_repo] = lambda: content_repo
    app.dependency_overrides[get_content_type_repo] = lambda: type_repo
    app.dependency_overrides[get_media_repo] = lambda: media_repo
    app.dependency_overrides[get_profile_repo] = lambda: profile_repo
    app.dependency_overrides[get_object_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def author(identity):
    """A signed-in user: (user, auth headers)."""
    user, token = identity.add_user("author@example.com")
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_author(identity):
    user, token = identity.add_user("other@example.com")
    return user, {"Authorization": f"Bearer {token}"}
