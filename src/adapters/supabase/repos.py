"""
Supabase table repositories.

Tables store the owner in a user_id column; entities call it owner_id.
Rows are mapped in both directions here and nowhere else.
"""

from __future__ import annotations

import builtins
from datetime import datetime
from typing import Any

from supabase import Client

from src.adapters.supabase.client import platform_call, to_row
from src.domain.entities import ContentItem, ContentTypeDef, MediaItem
from src.domain.normalize import normalize_record

CONTENT_SELECT = "*, content_type:content_types(*)"


def _owner_from_row(row: dict[str, Any]) -> dict[str, Any]:
    row = dict(row)
    if "user_id" in row:
        row["owner_id"] = row.pop("user_id")
    return row


def _owner_to_row(values: dict[str, Any]) -> dict[str, Any]:
    values = dict(values)
    if "owner_id" in values:
        values["user_id"] = values.pop("owner_id")
    return to_row(values)


def _first(data: Any) -> dict[str, Any] | None:
    if isinstance(data, list):
        return data[0] if data else None
    return data or None


class SupabaseContentRepo:
    table = "contents"

    def __init__(self, client: Client):
        self.client = client

    def _to_entity(self, row: dict[str, Any]) -> ContentItem:
        return ContentItem.model_validate(_owner_from_row(normalize_record(row)))

    def get_by_id(self, content_id: str, *, owner_id: str | None = None) -> ContentItem | None:
        query = self.client.table(self.table).select(CONTENT_SELECT).eq("id", content_id)
        if owner_id is not None:
            query = query.eq("user_id", owner_id)
        with platform_call("Fetch content"):
            res = query.limit(1).execute()
        row = _first(res.data)
        return self._to_entity(row) if row else None

    def list(
        self,
        *,
        owner_id: str | None = None,
        type_id: str | None = None,
        statuses: builtins.list[str] | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> builtins.list[ContentItem]:
        query = self.client.table(self.table).select(CONTENT_SELECT)
        if owner_id is not None:
            query = query.eq("user_id", owner_id)
        if type_id is not None:
            query = query.eq("type_id", type_id)
        if statuses:
            query = query.in_("status", statuses)
        with platform_call("List content"):
            res = (
                query.order("created_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )
        return [self._to_entity(row) for row in res.data or []]

    def list_due(self, now: datetime, *, type_id: str | None = None) -> builtins.list[ContentItem]:
        query = (
            self.client.table(self.table)
            .select(CONTENT_SELECT)
            .eq("status", "scheduled")
            .lte("scheduled_at", now.isoformat())
        )
        if type_id is not None:
            query = query.eq("type_id", type_id)
        with platform_call("List due content"):
            res = query.order("scheduled_at").execute()
        return [self._to_entity(row) for row in res.data or []]

    def insert(self, content: ContentItem) -> ContentItem:
        values = content.model_dump(mode="json", exclude={"content_type"}, exclude_none=True)
        with platform_call("Create content"):
            res = self.client.table(self.table).insert(_owner_to_row(values)).execute()
        row = _first(res.data)
        return self._to_entity(row) if row else content

    def update(
        self,
        content_id: str,
        fields: dict[str, Any],
        *,
        owner_id: str | None = None,
    ) -> ContentItem | None:
        query = self.client.table(self.table).update(_owner_to_row(fields)).eq("id", content_id)
        if owner_id is not None:
            query = query.eq("user_id", owner_id)
        with platform_call("Update content"):
            res = query.execute()
        row = _first(res.data)
        return self._to_entity(row) if row else None

    def delete(self, content_id: str, *, owner_id: str | None = None) -> bool:
        query = self.client.table(self.table).delete().eq("id", content_id)
        if owner_id is not None:
            query = query.eq("user_id", owner_id)
        with platform_call("Delete content"):
            res = query.execute()
        return bool(res.data)


class SupabaseContentTypeRepo:
    table = "content_types"

    def __init__(self, client: Client):
        self.client = client

    def _to_entity(self, row: dict[str, Any]) -> ContentTypeDef:
        row = _owner_from_row(row)
        row["fields"] = row.get("fields") or []
        row["description"] = row.get("description") or ""
        return ContentTypeDef.model_validate(row)

    def get_by_id(self, type_id: str) -> ContentTypeDef | None:
        with platform_call("Fetch content type"):
            res = self.client.table(self.table).select("*").eq("id", type_id).limit(1).execute()
        row = _first(res.data)
        return self._to_entity(row) if row else None

    def list_visible(self, owner_id: str) -> list[ContentTypeDef]:
        with platform_call("List content types"):
            res = (
                self.client.table(self.table)
                .select("*")
                .or_(f"user_id.eq.{owner_id},user_id.is.null")
                .order("created_at", desc=True)
                .execute()
            )
        return [self._to_entity(row) for row in res.data or []]

    def insert(self, content_type: ContentTypeDef) -> ContentTypeDef:
        values = content_type.model_dump(mode="json", exclude_none=True)
        with platform_call("Create content type"):
            res = self.client.table(self.table).insert(_owner_to_row(values)).execute()
        row = _first(res.data)
        return self._to_entity(row) if row else content_type

    def update(
        self, type_id: str, fields: dict[str, Any], *, owner_id: str
    ) -> ContentTypeDef | None:
        with platform_call("Update content type"):
            res = (
                self.client.table(self.table)
                .update(_owner_to_row(fields))
                .eq("id", type_id)
                .eq("user_id", owner_id)
                .execute()
            )
        row = _first(res.data)
        return self._to_entity(row) if row else None

    def delete(self, type_id: str, *, owner_id: str) -> bool:
        with platform_call("Delete content type"):
            res = (
                self.client.table(self.table)
                .delete()
                .eq("id", type_id)
                .eq("user_id", owner_id)
                .execute()
            )
        return bool(res.data)


class SupabaseMediaRepo:
    table = "media"

    def __init__(self, client: Client):
        self.client = client

    def _to_entity(self, row: dict[str, Any]) -> MediaItem:
        return MediaItem.model_validate(_owner_from_row(row))

    def get_by_id(self, media_id: str, *, owner_id: str) -> MediaItem | None:
        with platform_call("Fetch media"):
            res = (
                self.client.table(self.table)
                .select("*")
                .eq("id", media_id)
                .eq("user_id", owner_id)
                .limit(1)
                .execute()
            )
        row = _first(res.data)
        return self._to_entity(row) if row else None

    def list(self, *, owner_id: str, limit: int = 50, offset: int = 0) -> builtins.list[MediaItem]:
        with platform_call("List media"):
            res = (
                self.client.table(self.table)
                .select("*")
                .eq("user_id", owner_id)
                .order("created_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )
        return [self._to_entity(row) for row in res.data or []]

    def insert(self, media: MediaItem) -> MediaItem:
        values = media.model_dump(mode="json", exclude_none=True)
        with platform_call("Create media"):
            res = self.client.table(self.table).insert(_owner_to_row(values)).execute()
        row = _first(res.data)
        return self._to_entity(row) if row else media

    def delete(self, media_id: str, *, owner_id: str) -> bool:
        with platform_call("Delete media"):
            res = (
                self.client.table(self.table)
                .delete()
                .eq("id", media_id)
                .eq("user_id", owner_id)
                .execute()
            )
        return bool(res.data)


class SupabaseProfileRepo:
    table = "profiles"

    def __init__(self, client: Client):
        self.client = client

    def get(self, user_id: str) -> dict[str, Any] | None:
        with platform_call("Fetch profile"):
            res = self.client.table(self.table).select("*").eq("id", user_id).limit(1).execute()
        return _first(res.data)

    def upsert(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        values = to_row({**fields, "id": user_id})
        with platform_call("Update profile"):
            res = self.client.table(self.table).upsert(values).execute()
        return _first(res.data) or values
