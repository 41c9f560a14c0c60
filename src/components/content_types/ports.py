"""
Content type component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from src.domain.entities import ContentTypeDef


class ContentTypeRepoPort(Protocol):
    """Repository for content types. Raises PlatformError on failure."""

    def get_by_id(self, type_id: str) -> ContentTypeDef | None: ...

    def list_visible(self, owner_id: str) -> list[ContentTypeDef]:
        """Types owned by owner_id plus public types."""
        ...

    def insert(self, content_type: ContentTypeDef) -> ContentTypeDef: ...

    def update(
        self, type_id: str, fields: dict[str, Any], *, owner_id: str
    ) -> ContentTypeDef | None: ...

    def delete(self, type_id: str, *, owner_id: str) -> bool: ...


class RulesPort(Protocol):
    """Port for content type rules."""

    def get_default_fields(self) -> list[dict[str, Any]]:
        """Field list given to types created without explicit fields."""
        ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
