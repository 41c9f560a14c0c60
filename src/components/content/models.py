"""
Content component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities import ContentItem

# --- Validation Error ---


@dataclass(frozen=True)
class ContentValidationError:
    """Content operation error."""

    code: str
    message: str
    field: str | None = None
    details: Any = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateContentInput:
    """Input for creating a content item under a content type."""

    type_id: str
    owner_id: str
    data: dict[str, Any]
    status: str | None = None
    scheduled_at: datetime | None = None


@dataclass(frozen=True)
class UpdateContentInput:
    """Input for updating the data payload of a content item."""

    content_id: str
    owner_id: str
    data: dict[str, Any]
    replace: bool = False


@dataclass(frozen=True)
class GetContentInput:
    """Input for retrieving one of the caller's content items."""

    content_id: str
    owner_id: str


@dataclass(frozen=True)
class ListContentInput:
    """Input for listing the caller's content items."""

    owner_id: str
    type_id: str | None = None
    status: str | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class TransitionContentInput:
    """Input for content status transitions."""

    content_id: str
    owner_id: str
    status: str | None
    scheduled_at: datetime | None = None


@dataclass(frozen=True)
class DeleteContentInput:
    """Input for deleting content."""

    content_id: str
    owner_id: str


@dataclass(frozen=True)
class ListPublishedInput:
    """Input for the public listing of published content."""

    type_id: str | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class GetPublishedInput:
    """Input for reading one published item publicly."""

    content_id: str


@dataclass(frozen=True)
class PromoteDueInput:
    """Input for the eager promotion sweep."""

    type_id: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class ContentOutput:
    """Output containing a single content item."""

    content: ContentItem | None
    errors: list[ContentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContentListOutput:
    """Output containing a list of content items."""

    items: list[ContentItem]
    limit: int
    offset: int
    errors: list[ContentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContentOperationOutput:
    """Output for content operations (create, update, delete, transition)."""

    content: ContentItem | None = None
    errors: list[ContentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PromoteDueOutput:
    """Output of the promotion sweep."""

    promoted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    errors: list[ContentValidationError] = field(default_factory=list)
    success: bool = True
