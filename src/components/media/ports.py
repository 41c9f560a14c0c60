"""
Media component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.domain.entities import MediaItem
from src.ports.storage import ObjectStoragePort

__all__ = ["MediaRepoPort", "ObjectStoragePort", "RulesPort", "TimePort"]


class MediaRepoPort(Protocol):
    """Repository for media metadata. Raises PlatformError on failure."""

    def get_by_id(self, media_id: str, *, owner_id: str) -> MediaItem | None: ...

    def list(self, *, owner_id: str, limit: int = 50, offset: int = 0) -> list[MediaItem]:
        """List the owner's media, newest first."""
        ...

    def insert(self, media: MediaItem) -> MediaItem: ...

    def delete(self, media_id: str, *, owner_id: str) -> bool: ...


class RulesPort(Protocol):
    """Port for upload rules."""

    def get_allowed_mime_types(self) -> list[str]: ...

    def get_max_upload_bytes(self) -> int: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
