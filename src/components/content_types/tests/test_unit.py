"""
Content type component unit tests.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import pytest

from src.components.content_types import (
    DEFAULT_FIELDS,
    CreateContentTypeInput,
    DeleteContentTypeInput,
    GetContentTypeInput,
    ListContentTypesInput,
    UpdateContentTypeInput,
    parse_fields,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_update,
)
from src.domain.entities import ContentTypeDef

OWNER = "user-1"
OTHER = "user-2"


class MockContentTypeRepo:
    def __init__(self) -> None:
        self._types: dict[str, ContentTypeDef] = {}

    def get_by_id(self, type_id: str) -> ContentTypeDef | None:
        return self._types.get(type_id)

    def list_visible(self, owner_id: str) -> list[ContentTypeDef]:
        return [t for t in self._types.values() if t.owner_id in (owner_id, None)]

    def insert(self, content_type: ContentTypeDef) -> ContentTypeDef:
        saved = content_type.model_copy(update={"id": str(uuid4())})
        self._types[str(saved.id)] = saved
        return saved

    def update(
        self, type_id: str, fields: dict[str, Any], *, owner_id: str
    ) -> ContentTypeDef | None:
        existing = self._types.get(type_id)
        if existing is None or existing.owner_id != owner_id:
            return None
        saved = ContentTypeDef.model_validate({**existing.model_dump(), **fields})
        self._types[type_id] = saved
        return saved

    def delete(self, type_id: str, *, owner_id: str) -> bool:
        existing = self._types.get(type_id)
        if existing is None or existing.owner_id != owner_id:
            return False
        del self._types[type_id]
        return True


class MockRules:
    def __init__(self, fields: list[dict[str, Any]]) -> None:
        self._fields = fields

    def get_default_fields(self) -> list[dict[str, Any]]:
        return self._fields


class MockClockPort:
    def now_utc(self) -> datetime:
        return datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def repo() -> MockContentTypeRepo:
    return MockContentTypeRepo()


@pytest.fixture
def clock() -> MockClockPort:
    return MockClockPort()


def _create(repo, clock, owner=OWNER, **kwargs) -> ContentTypeDef:
    values: dict[str, Any] = {"title": "Post", "slug": "post", "description": "Posts"}
    values.update(kwargs)
    result = run_create(CreateContentTypeInput(owner_id=owner, **values), repo=repo, time=clock)
    assert result.success, result.errors
    assert result.content_type is not None
    return result.content_type


class TestCreate:
    def test_slug_becomes_name(self, repo, clock) -> None:
        content_type = _create(repo, clock)

        assert content_type.name == "post"
        assert content_type.owner_id == OWNER
        assert content_type.created_at == clock.now_utc()

    def test_default_fields(self, repo, clock) -> None:
        content_type = _create(repo, clock)

        assert [f.name for f in content_type.fields] == [f["name"] for f in DEFAULT_FIELDS]

    def test_default_fields_from_rules(self, repo, clock) -> None:
        rules = MockRules([{"name": "headline", "type": "string", "required": True}])
        inp = CreateContentTypeInput(owner_id=OWNER, title="T", slug="t", description="d")

        result = run_create(inp, repo=repo, time=clock, rules=rules)

        assert result.content_type is not None
        assert [f.name for f in result.content_type.fields] == ["headline"]

    def test_explicit_empty_fields(self, repo, clock) -> None:
        content_type = _create(repo, clock, fields=[])

        assert content_type.fields == []

    @pytest.mark.parametrize("missing", ["title", "slug", "description"])
    def test_required_values(self, repo, clock, missing) -> None:
        values = {"title": "Post", "slug": "post", "description": "Posts", missing: ""}
        result = run_create(CreateContentTypeInput(owner_id=OWNER, **values), repo=repo, time=clock)

        assert result.errors[0].code == "missing_fields"
        assert result.errors[0].field == missing


class TestParseFields:
    def test_field_needs_name_and_type(self) -> None:
        _, errors = parse_fields([{"name": "title"}])

        assert errors[0].code == "invalid_field"

    def test_duplicate_names(self) -> None:
        fields, errors = parse_fields(
            [{"name": "a", "type": "string"}, {"name": "a", "type": "text"}]
        )

        assert len(fields) == 1
        assert "Duplicate" in errors[0].message


class TestVisibility:
    def test_get_public_type(self, repo, clock) -> None:
        public = _create(repo, clock, owner=None)

        result = run_get(GetContentTypeInput(type_id=str(public.id), owner_id=OTHER), repo=repo)

        assert result.success

    def test_get_other_users_type(self, repo, clock) -> None:
        private = _create(repo, clock)

        result = run_get(GetContentTypeInput(type_id=str(private.id), owner_id=OTHER), repo=repo)

        assert result.errors[0].code == "not_found"

    def test_list_owned_plus_public(self, repo, clock) -> None:
        _create(repo, clock, slug="mine")
        _create(repo, clock, owner=None, slug="shared")
        _create(repo, clock, owner=OTHER, slug="theirs")

        result = run_list(ListContentTypesInput(owner_id=OWNER), repo=repo)

        assert sorted(t.name for t in result.items) == ["mine", "shared"]


class TestUpdateDelete:
    def test_update_own_type(self, repo, clock) -> None:
        content_type = _create(repo, clock)
        inp = UpdateContentTypeInput(
            type_id=str(content_type.id),
            owner_id=OWNER,
            title="Article",
            slug="article",
            description="Articles",
            fields=[{"name": "title", "type": "string", "required": True}],
        )

        result = run_update(inp, repo=repo, time=clock)

        assert result.content_type is not None
        assert result.content_type.name == "article"
        assert [f.name for f in result.content_type.fields] == ["title"]

    def test_update_public_type_is_forbidden(self, repo, clock) -> None:
        public = _create(repo, clock, owner=None)
        inp = UpdateContentTypeInput(
            type_id=str(public.id), owner_id=OWNER, title="x", slug="x", description="x"
        )

        result = run_update(inp, repo=repo, time=clock)

        assert result.errors[0].code == "forbidden"

    def test_update_other_users_type_is_not_found(self, repo, clock) -> None:
        theirs = _create(repo, clock, owner=OTHER)
        inp = UpdateContentTypeInput(
            type_id=str(theirs.id), owner_id=OWNER, title="x", slug="x", description="x"
        )

        result = run_update(inp, repo=repo, time=clock)

        assert result.errors[0].code == "not_found"

    def test_delete(self, repo, clock) -> None:
        content_type = _create(repo, clock)

        other = run_delete(
            DeleteContentTypeInput(type_id=str(content_type.id), owner_id=OTHER), repo=repo
        )
        mine = run_delete(
            DeleteContentTypeInput(type_id=str(content_type.id), owner_id=OWNER), repo=repo
        )

        assert other.errors[0].code == "not_found"
        assert mine.success
        assert repo.get_by_id(str(content_type.id)) is None
