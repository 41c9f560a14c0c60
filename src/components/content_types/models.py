"""
Content type component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import ContentTypeDef


@dataclass(frozen=True)
class ContentTypeError:
    """Content type operation error."""

    code: str
    message: str
    field: str | None = None
    details: Any = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateContentTypeInput:
    owner_id: str
    title: str | None
    slug: str | None
    description: str | None
    fields: list[dict[str, Any]] | None = None


@dataclass(frozen=True)
class GetContentTypeInput:
    type_id: str
    owner_id: str


@dataclass(frozen=True)
class ListContentTypesInput:
    owner_id: str


@dataclass(frozen=True)
class UpdateContentTypeInput:
    type_id: str
    owner_id: str
    title: str | None
    slug: str | None
    description: str | None
    fields: list[dict[str, Any]] | None = None


@dataclass(frozen=True)
class DeleteContentTypeInput:
    type_id: str
    owner_id: str


# --- Output Models ---


@dataclass(frozen=True)
class ContentTypeOutput:
    content_type: ContentTypeDef | None = None
    errors: list[ContentTypeError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContentTypeListOutput:
    items: list[ContentTypeDef] = field(default_factory=list)
    errors: list[ContentTypeError] = field(default_factory=list)
    success: bool = True
