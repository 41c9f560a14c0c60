"""
Content component port definitions.

Repository methods raise PlatformError when the platform call fails.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from src.domain.entities import ContentItem, ContentTypeDef


class ContentRepoPort(Protocol):
    """Repository interface for content items."""

    def get_by_id(self, content_id: str, *, owner_id: str | None = None) -> ContentItem | None:
        """Get content by ID, optionally scoped to an owner."""
        ...

    def list(
        self,
        *,
        owner_id: str | None = None,
        type_id: str | None = None,
        statuses: list[str] | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[ContentItem]:
        """List content, newest first."""
        ...

    def list_due(self, now: datetime, *, type_id: str | None = None) -> list[ContentItem]:
        """List scheduled items with scheduled_at <= now."""
        ...

    def insert(self, content: ContentItem) -> ContentItem:
        """Insert a new item and return the stored row."""
        ...

    def update(
        self,
        content_id: str,
        fields: dict[str, Any],
        *,
        owner_id: str | None = None,
    ) -> ContentItem | None:
        """Update matching row; None when no row matched."""
        ...

    def delete(self, content_id: str, *, owner_id: str | None = None) -> bool:
        """Delete matching row; False when no row matched."""
        ...


class ContentTypeReaderPort(Protocol):
    """Read access to content types, used to validate new items."""

    def get_by_id(self, type_id: str) -> ContentTypeDef | None:
        """Get content type by ID."""
        ...


class TimePort(Protocol):
    """Port for time operations."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
