"""
Content component - content items and their publication lifecycle.

Manages content items of a user-defined content type. Every owner-facing
operation is scoped to the caller: an item that exists but belongs to
someone else is reported as not found.

Lifecycle (see src.domain.state):
- draft: scheduled_at and published_at cleared
- scheduled: requires scheduled_at, clears published_at
- published: published_at = now, clears scheduled_at

Lazy promotion: the public read paths treat due scheduled items as
published and issue a best-effort write promoting them. A failed
promotion write is logged and never fails the read. Until the next public
read (or a run_promote_due sweep) the stored status may still be
"scheduled" after its scheduled time.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from src.domain.entities import CONTENT_STATUSES, ContentItem, ContentTypeDef
from src.domain.normalize import RECORD_FIELDS
from src.domain.state import (
    StatusChange,
    StatusRejection,
    apply_status_change,
    as_utc,
    is_due,
    plan_status_change,
    promote,
    published_change,
)
from src.ports.errors import PlatformError

from .models import (
    ContentListOutput,
    ContentOperationOutput,
    ContentOutput,
    ContentValidationError,
    CreateContentInput,
    DeleteContentInput,
    GetContentInput,
    GetPublishedInput,
    ListContentInput,
    ListPublishedInput,
    PromoteDueInput,
    PromoteDueOutput,
    TransitionContentInput,
    UpdateContentInput,
)
from .ports import ContentRepoPort, ContentTypeReaderPort, TimePort

logger = logging.getLogger(__name__)


# --- Error helpers ---


def _upstream(err: PlatformError) -> ContentValidationError:
    return ContentValidationError(
        code="upstream_error",
        message=err.message,
        details=err.details,
    )


def _not_found(message: str = "Content not found") -> ContentValidationError:
    return ContentValidationError(code="not_found", message=message)


def _rejected(rejection: StatusRejection) -> ContentValidationError:
    return ContentValidationError(
        code=rejection.code,
        message=rejection.message,
        field=rejection.field,
    )


def _failed(*errors: ContentValidationError) -> ContentOperationOutput:
    return ContentOperationOutput(content=None, errors=list(errors), success=False)


# --- Validation Functions ---


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def validate_required_fields(
    content_type: ContentTypeDef,
    data: dict[str, Any],
) -> list[ContentValidationError]:
    """Check that every required field of the type is present in data."""
    missing = [
        f.name
        for f in content_type.fields
        if f.required and f.name not in RECORD_FIELDS and _is_blank(data.get(f.name))
    ]
    if not missing:
        return []
    return [
        ContentValidationError(
            code="missing_fields",
            message=f"Missing required fields: {', '.join(missing)}",
            field=missing[0],
        )
    ]


def _is_visible(content_type: ContentTypeDef, owner_id: str) -> bool:
    return content_type.is_public or content_type.owner_id == owner_id


def _sort_published(items: list[ContentItem]) -> list[ContentItem]:
    def key(item: ContentItem) -> datetime:
        stamp = item.published_at or item.updated_at or item.created_at
        return as_utc(stamp) if stamp else datetime.min.replace(tzinfo=UTC)

    return sorted(items, key=key, reverse=True)


def _try_promote(repo: ContentRepoPort, item: ContentItem, now: datetime) -> bool:
    """Best-effort promotion write. Never raises."""
    try:
        saved = repo.update(str(item.id), published_change(now).as_update())
    except PlatformError as e:
        logger.warning("Lazy promotion of content %s failed: %s", item.id, e.message)
        return False
    if saved is None:
        # Row-level security refuses writes by matching no rows
        logger.warning("Lazy promotion of content %s failed: no row updated", item.id)
        return False
    logger.info("Promoted scheduled content %s to published", item.id)
    return True


# --- Component Entry Points ---


def run_get(
    inp: GetContentInput,
    *,
    repo: ContentRepoPort,
) -> ContentOutput:
    """
    Get one of the caller's content items.

    Args:
        inp: Input containing content_id and owner_id.
        repo: Content repository port.

    Returns:
        ContentOutput with content item or error.
    """
    try:
        content = repo.get_by_id(inp.content_id, owner_id=inp.owner_id)
    except PlatformError as e:
        return ContentOutput(content=None, errors=[_upstream(e)], success=False)

    if content is None:
        return ContentOutput(content=None, errors=[_not_found()], success=False)

    return ContentOutput(content=content, errors=[], success=True)


def run_list(
    inp: ListContentInput,
    *,
    repo: ContentRepoPort,
) -> ContentListOutput:
    """
    List the caller's content, newest first.

    Args:
        inp: Input containing owner and filters.
        repo: Content repository port.

    Returns:
        ContentListOutput with items and pagination.
    """
    statuses: list[str] | None = None
    if inp.status is not None:
        if inp.status not in CONTENT_STATUSES:
            return ContentListOutput(
                items=[],
                limit=inp.limit,
                offset=inp.offset,
                errors=[
                    ContentValidationError(
                        code="invalid_status",
                        message="status must be draft, published, or scheduled",
                        field="status",
                    )
                ],
                success=False,
            )
        statuses = [inp.status]

    try:
        items = repo.list(
            owner_id=inp.owner_id,
            type_id=inp.type_id,
            statuses=statuses,
            limit=inp.limit,
            offset=inp.offset,
        )
    except PlatformError as e:
        return ContentListOutput(
            items=[], limit=inp.limit, offset=inp.offset, errors=[_upstream(e)], success=False
        )

    return ContentListOutput(items=items, limit=inp.limit, offset=inp.offset)


def run_create(
    inp: CreateContentInput,
    *,
    repo: ContentRepoPort,
    types: ContentTypeReaderPort,
    time: TimePort,
) -> ContentOperationOutput:
    """
    Create a content item under a content type.

    The type must be owned by the caller or public. Items start as draft
    unless an initial status is given, in which case the lifecycle rules
    apply exactly as for a transition.

    Args:
        inp: Input containing type, owner, data and optional status.
        repo: Content repository port.
        types: Content type reader port.
        time: Time port for timestamps.

    Returns:
        ContentOperationOutput with created content or errors.
    """
    now = time.now_utc()

    change: StatusChange | None = None
    if inp.status is not None:
        planned = plan_status_change(inp.status, inp.scheduled_at, now)
        if isinstance(planned, StatusRejection):
            return _failed(_rejected(planned))
        change = planned

    try:
        content_type = types.get_by_id(inp.type_id)
    except PlatformError as e:
        return _failed(_upstream(e))

    if content_type is None or not _is_visible(content_type, inp.owner_id):
        return _failed(_not_found("Content type not found"))

    errors = validate_required_fields(content_type, inp.data)
    if errors:
        return _failed(*errors)

    content = ContentItem(
        type_id=inp.type_id,
        owner_id=inp.owner_id,
        status="draft",
        data=dict(inp.data),
        created_at=now,
        updated_at=now,
    )
    if change is not None:
        content = apply_status_change(content, change)

    try:
        saved = repo.insert(content)
    except PlatformError as e:
        return _failed(_upstream(e))

    return ContentOperationOutput(content=saved, errors=[], success=True)


def run_update(
    inp: UpdateContentInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
) -> ContentOperationOutput:
    """
    Update the data payload of one of the caller's items.

    Fields are merged into the existing data unless replace is set.
    Status is never changed here; use run_transition.
    """
    try:
        existing = repo.get_by_id(inp.content_id, owner_id=inp.owner_id)
    except PlatformError as e:
        return _failed(_upstream(e))

    if existing is None:
        return _failed(_not_found())

    data = dict(inp.data) if inp.replace else {**existing.data, **inp.data}

    try:
        saved = repo.update(
            inp.content_id,
            {"data": data, "updated_at": time.now_utc()},
            owner_id=inp.owner_id,
        )
    except PlatformError as e:
        return _failed(_upstream(e))

    if saved is None:
        return _failed(_not_found())

    return ContentOperationOutput(content=saved, errors=[], success=True)


def run_transition(
    inp: TransitionContentInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
) -> ContentOperationOutput:
    """
    Transition one of the caller's items to a new status.

    The request is validated before anything is read or written, so a
    rejected transition performs no write.
    """
    planned = plan_status_change(inp.status, inp.scheduled_at, time.now_utc())
    if isinstance(planned, StatusRejection):
        return _failed(_rejected(planned))

    try:
        saved = repo.update(inp.content_id, planned.as_update(), owner_id=inp.owner_id)
    except PlatformError as e:
        return _failed(_upstream(e))

    if saved is None:
        return _failed(_not_found())

    return ContentOperationOutput(content=saved, errors=[], success=True)


def run_delete(
    inp: DeleteContentInput,
    *,
    repo: ContentRepoPort,
) -> ContentOperationOutput:
    """
    Delete one of the caller's items.

    Deleting another user's item reports not_found.
    """
    try:
        deleted = repo.delete(inp.content_id, owner_id=inp.owner_id)
    except PlatformError as e:
        return _failed(_upstream(e))

    if not deleted:
        return _failed(_not_found())

    return ContentOperationOutput(content=None, errors=[], success=True)


def run_list_published(
    inp: ListPublishedInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
) -> ContentListOutput:
    """
    Public listing of published content.

    Due scheduled items are promoted first so that successful promotions
    paginate like any published item. Items whose promotion write failed
    are still returned as published, merged into the first page.
    """
    now = time.now_utc()

    try:
        due = repo.list_due(now, type_id=inp.type_id)
    except PlatformError as e:
        logger.warning("Could not look up due scheduled content: %s", e.message)
        due = []

    unpersisted = [promote(item, now) for item in due if not _try_promote(repo, item, now)]

    try:
        items = repo.list(
            type_id=inp.type_id,
            statuses=["published"],
            limit=inp.limit,
            offset=inp.offset,
        )
    except PlatformError as e:
        return ContentListOutput(
            items=[], limit=inp.limit, offset=inp.offset, errors=[_upstream(e)], success=False
        )

    if unpersisted and inp.offset == 0:
        seen = {str(i.id) for i in items}
        merged = items + [i for i in unpersisted if str(i.id) not in seen]
        items = _sort_published(merged)[: inp.limit]

    return ContentListOutput(items=items, limit=inp.limit, offset=inp.offset)


def run_get_published(
    inp: GetPublishedInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
) -> ContentOutput:
    """
    Public read of a single item.

    Published items are returned as stored; due scheduled items are
    promoted (best effort) and returned as published. Anything else is
    not found.
    """
    now = time.now_utc()

    try:
        content = repo.get_by_id(inp.content_id)
    except PlatformError as e:
        return ContentOutput(content=None, errors=[_upstream(e)], success=False)

    if content is None:
        return ContentOutput(
            content=None, errors=[_not_found("Published content not found")], success=False
        )

    if content.status == "published":
        return ContentOutput(content=content)

    if is_due(content, now):
        _try_promote(repo, content, now)
        return ContentOutput(content=promote(content, now))

    return ContentOutput(
        content=None, errors=[_not_found("Published content not found")], success=False
    )


def run_promote_due(
    inp: PromoteDueInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
) -> PromoteDueOutput:
    """
    Eager sweep: promote every due scheduled item.

    Meant for a periodic job; closes the window in which a due item is
    still stored as scheduled.
    """
    now = time.now_utc()
    try:
        due = repo.list_due(now, type_id=inp.type_id)
    except PlatformError as e:
        return PromoteDueOutput(errors=[_upstream(e)], success=False)

    promoted: list[str] = []
    failed: list[str] = []
    for item in due:
        if _try_promote(repo, item, now):
            promoted.append(str(item.id))
        else:
            failed.append(str(item.id))

    return PromoteDueOutput(promoted=promoted, failed=failed)
