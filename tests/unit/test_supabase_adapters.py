"""
Supabase adapter tests against a recording fake of the query builder.
"""

from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from supabase import PostgrestAPIError, StorageException

from src.adapters.supabase import (
    SupabaseContentRepo,
    SupabaseContentTypeRepo,
    SupabaseMediaRepo,
    SupabaseObjectStorage,
    SupabaseProfileRepo,
    platform_call,
)
from src.adapters.supabase.client import to_row
from src.domain.entities import ContentItem, ContentTypeDef
from src.ports.errors import PlatformError


class FakeQuery:
    def __init__(self, client: "FakeClient", table: str):
        self.client = client
        self.table = table
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def __getattr__(self, name: str):
        def record(*args: Any, **kwargs: Any) -> "FakeQuery":
            self.calls.append((name, args, kwargs))
            return self

        return record

    def execute(self) -> SimpleNamespace:
        if self.client.error is not None:
            raise self.client.error
        return SimpleNamespace(data=self.client.data)

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def arg(self, name: str) -> tuple[Any, ...]:
        return next(c[1] for c in self.calls if c[0] == name)


class FakeClient:
    def __init__(self, data: Any = None, error: Exception | None = None):
        self.data = data if data is not None else []
        self.error = error
        self.queries: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    @property
    def last(self) -> FakeQuery:
        return self.queries[-1]


class FakeBucket:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.uploads: list[dict[str, Any]] = []
        self.removed: list[list[str]] = []

    def upload(self, **kwargs: Any) -> None:
        if self.error is not None:
            raise self.error
        self.uploads.append(kwargs)

    def get_public_url(self, key: str) -> str:
        return f"https://proj.supabase.co/storage/v1/object/public/media/{key}"

    def remove(self, keys: list[str]) -> None:
        self.removed.append(keys)


class FakeStorageClient:
    def __init__(self, bucket: FakeBucket):
        self.bucket = bucket
        self.names: list[str] = []

    def from_(self, name: str) -> FakeBucket:
        self.names.append(name)
        return self.bucket


# --- Error translation ---


def test_postgrest_error_is_translated():
    err = PostgrestAPIError(
        {"message": "permission denied", "code": "42501", "hint": None, "details": "rls"}
    )

    with pytest.raises(PlatformError) as exc:
        with platform_call("Create content"):
            raise err

    assert exc.value.message == "permission denied"
    assert exc.value.code == "42501"
    assert exc.value.details == {"details": "rls", "hint": None}


def test_storage_error_is_translated():
    err = StorageException({"statusCode": "409", "error": "Duplicate", "message": "exists"})

    with pytest.raises(PlatformError) as exc:
        with platform_call("Upload object"):
            raise err

    assert exc.value.message == "exists"
    assert exc.value.details["statusCode"] == "409"


def test_transport_error_is_translated():
    with pytest.raises(PlatformError, match="List media failed"):
        with platform_call("List media"):
            raise httpx.ConnectError("connection refused")


def test_other_errors_propagate():
    with pytest.raises(KeyError):
        with platform_call("List media"):
            raise KeyError("bug")


def test_to_row_serializes_datetimes():
    when = datetime(2025, 1, 2, 3, 4, tzinfo=UTC)

    assert to_row({"published_at": when, "status": "published"}) == {
        "published_at": "2025-01-02T03:04:00+00:00",
        "status": "published",
    }


# --- Content ---


def test_content_rows_map_owner_and_normalize():
    client = FakeClient(
        data=[
            {"id": "c1", "type_id": "t1", "user_id": "u1", "status": "draft", "title": "Flat"},
            {
                "id": "c2",
                "type_id": "t1",
                "user_id": "u1",
                "status": "draft",
                "data": {"data": {"title": "Double"}},
            },
        ]
    )
    repo = SupabaseContentRepo(client)

    items = repo.list(owner_id="u1", type_id="t1", limit=10, offset=20)

    assert [i.owner_id for i in items] == ["u1", "u1"]
    assert [i.data for i in items] == [{"title": "Flat"}, {"title": "Double"}]
    query = client.last
    assert query.table == "contents"
    assert ("eq", ("user_id", "u1"), {}) in query.calls
    assert ("eq", ("type_id", "t1"), {}) in query.calls
    assert query.arg("range") == (20, 29)


def test_content_get_scopes_by_owner():
    client = FakeClient(data=[])
    repo = SupabaseContentRepo(client)

    assert repo.get_by_id("c1", owner_id="u1") is None
    assert ("eq", ("user_id", "u1"), {}) in client.last.calls


def test_content_insert_writes_user_id_and_nested_data():
    client = FakeClient(
        data=[{"id": "c9", "type_id": "t1", "user_id": "u1", "status": "draft", "data": {"a": 1}}]
    )
    repo = SupabaseContentRepo(client)

    saved = repo.insert(ContentItem(type_id="t1", owner_id="u1", data={"a": 1}))

    (row,) = client.last.arg("insert")
    assert row["user_id"] == "u1"
    assert "owner_id" not in row
    assert row["data"] == {"a": 1}
    assert saved.id == "c9"


def test_content_list_due_filters_scheduled():
    client = FakeClient(data=[])
    now = datetime(2025, 1, 1, tzinfo=UTC)

    SupabaseContentRepo(client).list_due(now)

    calls = client.last.calls
    assert ("eq", ("status", "scheduled"), {}) in calls
    assert ("lte", ("scheduled_at", now.isoformat()), {}) in calls


def test_content_list_due_filters_type():
    client = FakeClient(data=[])

    SupabaseContentRepo(client).list_due(datetime(2025, 1, 1, tzinfo=UTC), type_id="t1")

    assert ("eq", ("type_id", "t1"), {}) in client.last.calls


def test_content_delete_reports_missing_rows():
    repo = SupabaseContentRepo(FakeClient(data=[]))

    assert repo.delete("c1", owner_id="u1") is False


def test_content_errors_become_platform_errors():
    client = FakeClient(error=PostgrestAPIError({"message": "boom", "code": "500"}))

    with pytest.raises(PlatformError, match="boom"):
        SupabaseContentRepo(client).get_by_id("c1")


# --- Content types ---


def test_content_type_visibility_filter():
    client = FakeClient(
        data=[
            {"id": "t1", "user_id": None, "name": "post", "title": "Post", "fields": None},
            {"id": "t2", "user_id": "u1", "name": "page", "title": "Page", "description": None},
        ]
    )

    types = SupabaseContentTypeRepo(client).list_visible("u1")

    assert client.last.arg("or_") == ("user_id.eq.u1,user_id.is.null",)
    assert types[0].is_public
    assert types[0].fields == []
    assert types[1].owner_id == "u1"
    assert types[1].description == ""


def test_content_type_insert_serializes_fields():
    client = FakeClient(data=[])
    content_type = ContentTypeDef(
        owner_id="u1",
        name="post",
        title="Post",
        fields=[{"name": "title", "type": "string", "required": True}],
    )

    saved = SupabaseContentTypeRepo(client).insert(content_type)

    (row,) = client.last.arg("insert")
    assert row["user_id"] == "u1"
    assert row["fields"][0]["name"] == "title"
    assert saved == content_type


# --- Media, profiles, storage ---


def test_media_list_maps_owner():
    client = FakeClient(
        data=[
            {
                "id": "m1",
                "filename": "1-a.png",
                "originalname": "a.png",
                "mimetype": "image/png",
                "size": 3,
                "url": "https://x/1-a.png",
                "user_id": "u1",
            }
        ]
    )

    (item,) = SupabaseMediaRepo(client).list(owner_id="u1")

    assert item.owner_id == "u1"
    assert client.last.table == "media"


def test_profile_upsert_includes_id():
    client = FakeClient(data=[])

    row = SupabaseProfileRepo(client).upsert("u1", {"full_name": "Ada"})

    assert row == {"full_name": "Ada", "id": "u1"}
    assert client.last.arg("upsert") == ({"full_name": "Ada", "id": "u1"},)


def test_storage_upload_and_url():
    bucket = FakeBucket()
    client = SimpleNamespace(storage=FakeStorageClient(bucket))
    storage = SupabaseObjectStorage(client, bucket="media")

    storage.upload("1-a.png", b"abc", "image/png")
    url = storage.get_public_url("1-a.png")
    storage.remove([])
    storage.remove(["1-a.png"])

    assert bucket.uploads == [
        {"path": "1-a.png", "file": b"abc", "file_options": {"content-type": "image/png"}}
    ]
    assert url.endswith("/media/1-a.png")
    assert bucket.removed == [["1-a.png"]]
    assert client.storage.names == ["media", "media", "media"]


def test_storage_upload_error():
    bucket = FakeBucket(error=StorageException({"statusCode": "400", "message": "bad mime"}))
    storage = SupabaseObjectStorage(SimpleNamespace(storage=FakeStorageClient(bucket)))

    with pytest.raises(PlatformError, match="bad mime"):
        storage.upload("k", b"x", "image/png")
