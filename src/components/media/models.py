"""
Media component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import MediaItem


@dataclass(frozen=True)
class MediaValidationError:
    """Media operation error."""

    code: str
    message: str
    field: str | None = None
    details: Any = None


@dataclass(frozen=True)
class MediaRulesConfig:
    """Upload limits."""

    allowed_mime_types: list[str]
    max_upload_bytes: int


# --- Input Models ---


@dataclass(frozen=True)
class UploadMediaInput:
    data: bytes | None
    filename: str
    content_type: str
    owner_id: str
    description: str | None = None
    alt_text: str | None = None


@dataclass(frozen=True)
class GetMediaInput:
    media_id: str
    owner_id: str


@dataclass(frozen=True)
class ListMediaInput:
    owner_id: str
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class DeleteMediaInput:
    media_id: str
    owner_id: str


# --- Output Models ---


@dataclass(frozen=True)
class MediaOutput:
    media: MediaItem | None = None
    errors: list[MediaValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class MediaListOutput:
    items: list[MediaItem] = field(default_factory=list)
    limit: int = 50
    offset: int = 0
    errors: list[MediaValidationError] = field(default_factory=list)
    success: bool = True
