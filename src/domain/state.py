"""
Content lifecycle state machine.

States: draft (initial), scheduled, published. There is no terminal state;
any state may move to any other through an explicit status change.

Timestamp bookkeeping per target state:
- draft: scheduled_at and published_at cleared
- scheduled: scheduled_at required and set, published_at cleared
- published: published_at = now, scheduled_at cleared

A scheduled item whose scheduled_at has passed is "due". Public read paths
treat due items as published and promote them (see run_list_published).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, cast

from src.domain.entities import CONTENT_STATUSES, ContentItem, ContentStatus


@dataclass(frozen=True)
class StatusChange:
    """A validated status change, ready to be written."""

    status: ContentStatus
    scheduled_at: datetime | None
    published_at: datetime | None
    updated_at: datetime

    def as_update(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "scheduled_at": self.scheduled_at,
            "published_at": self.published_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class StatusRejection:
    """A status change that must not be written."""

    code: str
    message: str
    field: str = "status"


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def published_change(now: datetime) -> StatusChange:
    """The change that publishes an item at the given instant."""
    return StatusChange(
        status="published",
        scheduled_at=None,
        published_at=now,
        updated_at=now,
    )


def plan_status_change(
    status: str | None,
    scheduled_at: datetime | None,
    now: datetime,
) -> StatusChange | StatusRejection:
    """
    Validate a requested status and compute the resulting timestamps.

    Nothing is read or written here, so a rejection guarantees no write.
    """
    if status not in CONTENT_STATUSES:
        return StatusRejection(
            code="invalid_status",
            message="status must be draft, published, or scheduled",
        )

    if status == "scheduled":
        if scheduled_at is None:
            return StatusRejection(
                code="scheduled_at_required",
                message="scheduled_at is required for scheduled status",
                field="scheduled_at",
            )
        return StatusChange(
            status="scheduled",
            scheduled_at=as_utc(scheduled_at),
            published_at=None,
            updated_at=now,
        )

    if status == "published":
        return published_change(now)

    return StatusChange(
        status=cast(ContentStatus, status),
        scheduled_at=None,
        published_at=None,
        updated_at=now,
    )


def apply_status_change(item: ContentItem, change: StatusChange) -> ContentItem:
    """Return a NEW ContentItem with the change applied."""
    return item.model_copy(update=change.as_update())


def is_due(item: ContentItem, now: datetime) -> bool:
    """True for a scheduled item whose scheduled time has been reached."""
    if item.status != "scheduled" or item.scheduled_at is None:
        return False
    return as_utc(item.scheduled_at) <= as_utc(now)


def promote(item: ContentItem, now: datetime) -> ContentItem:
    """Return the published view of a due scheduled item."""
    return apply_status_change(item, published_change(now))


def is_consistent(item: ContentItem) -> bool:
    """Check the status/timestamp invariant."""
    if item.status == "draft":
        return item.scheduled_at is None and item.published_at is None
    if item.status == "scheduled":
        return item.scheduled_at is not None and item.published_at is None
    return item.published_at is not None and item.scheduled_at is None
