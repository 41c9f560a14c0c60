"""
Content type component - user-defined content schemas.

A content type names a schema (ordered field list) for content items.
Types are owned by a user or public (no owner). Public types are visible
to everyone but can only be changed by their owner, so editing one you do
not own is forbidden rather than not found.

Deleting a type does not delete its content items.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from src.domain.entities import ContentTypeDef, FieldDefinition
from src.ports.errors import PlatformError

from .models import (
    ContentTypeError,
    ContentTypeListOutput,
    ContentTypeOutput,
    CreateContentTypeInput,
    DeleteContentTypeInput,
    GetContentTypeInput,
    ListContentTypesInput,
    UpdateContentTypeInput,
)
from .ports import ContentTypeRepoPort, RulesPort, TimePort

# --- Default Configuration ---

DEFAULT_FIELDS: list[dict[str, Any]] = [
    {"name": "title", "type": "string", "title": "Title", "required": True},
    {"name": "slug", "type": "string", "title": "Slug", "required": True},
    {"name": "description", "type": "text", "title": "Description", "required": False},
    {"name": "created_at", "type": "datetime", "title": "Created At", "required": True},
    {"name": "updated_at", "type": "datetime", "title": "Updated At", "required": True},
]


def _upstream(err: PlatformError) -> ContentTypeError:
    return ContentTypeError(code="upstream_error", message=err.message, details=err.details)


def _not_found() -> ContentTypeError:
    return ContentTypeError(code="not_found", message="Content type not found")


def _failed(*errors: ContentTypeError) -> ContentTypeOutput:
    return ContentTypeOutput(content_type=None, errors=list(errors), success=False)


# --- Validation Functions ---


def _validate_required(
    title: str | None, slug: str | None, description: str | None
) -> list[ContentTypeError]:
    missing = [
        name
        for name, value in (("title", title), ("slug", slug), ("description", description))
        if not value or not str(value).strip()
    ]
    if not missing:
        return []
    return [
        ContentTypeError(
            code="missing_fields",
            message="Missing required fields: title, slug, and description are required",
            field=missing[0],
        )
    ]


def parse_fields(
    raw_fields: list[dict[str, Any]],
) -> tuple[list[FieldDefinition], list[ContentTypeError]]:
    """Validate a field list; every field needs a unique name and a type."""
    fields: list[FieldDefinition] = []
    errors: list[ContentTypeError] = []
    seen: set[str] = set()

    for position, raw in enumerate(raw_fields):
        try:
            definition = FieldDefinition.model_validate(raw)
        except ValidationError:
            errors.append(
                ContentTypeError(
                    code="invalid_field",
                    message=f"Field at position {position} must have a name and a type",
                    field="fields",
                )
            )
            continue

        if definition.name in seen:
            errors.append(
                ContentTypeError(
                    code="invalid_field",
                    message=f"Duplicate field name '{definition.name}'",
                    field="fields",
                )
            )
            continue

        seen.add(definition.name)
        fields.append(definition)

    return fields, errors


def _default_fields(rules: RulesPort | None) -> list[dict[str, Any]]:
    if rules is None:
        return [dict(f) for f in DEFAULT_FIELDS]
    return rules.get_default_fields() or [dict(f) for f in DEFAULT_FIELDS]


# --- Component Entry Points ---


def run_create(
    inp: CreateContentTypeInput,
    *,
    repo: ContentTypeRepoPort,
    time: TimePort,
    rules: RulesPort | None = None,
) -> ContentTypeOutput:
    """
    Create a content type owned by the caller.

    The request slug becomes the machine name of the type. Without an
    explicit field list the type gets the default fields from rules.
    """
    errors = _validate_required(inp.title, inp.slug, inp.description)
    if errors:
        return _failed(*errors)

    raw_fields = inp.fields if inp.fields is not None else _default_fields(rules)
    fields, field_errors = parse_fields(raw_fields)
    if field_errors:
        return _failed(*field_errors)

    now = time.now_utc()
    content_type = ContentTypeDef(
        owner_id=inp.owner_id,
        name=str(inp.slug).strip(),
        title=str(inp.title).strip(),
        description=str(inp.description).strip(),
        fields=fields,
        created_at=now,
        updated_at=now,
    )

    try:
        saved = repo.insert(content_type)
    except PlatformError as e:
        return _failed(_upstream(e))

    return ContentTypeOutput(content_type=saved)


def run_get(
    inp: GetContentTypeInput,
    *,
    repo: ContentTypeRepoPort,
) -> ContentTypeOutput:
    """Get a content type the caller owns, or a public one."""
    try:
        content_type = repo.get_by_id(inp.type_id)
    except PlatformError as e:
        return _failed(_upstream(e))

    if content_type is None:
        return _failed(_not_found())
    if not content_type.is_public and content_type.owner_id != inp.owner_id:
        return _failed(_not_found())

    return ContentTypeOutput(content_type=content_type)


def run_list(
    inp: ListContentTypesInput,
    *,
    repo: ContentTypeRepoPort,
) -> ContentTypeListOutput:
    """List the caller's content types plus public ones."""
    try:
        items = repo.list_visible(inp.owner_id)
    except PlatformError as e:
        return ContentTypeListOutput(items=[], errors=[_upstream(e)], success=False)

    return ContentTypeListOutput(items=items)


def _check_owned(
    type_id: str, owner_id: str, repo: ContentTypeRepoPort
) -> ContentTypeError | None:
    try:
        existing = repo.get_by_id(type_id)
    except PlatformError as e:
        return _upstream(e)

    if existing is None:
        return _not_found()
    if existing.owner_id == owner_id:
        return None
    if existing.is_public:
        return ContentTypeError(
            code="forbidden",
            message="Not allowed to modify a public content type",
        )
    return _not_found()


def run_update(
    inp: UpdateContentTypeInput,
    *,
    repo: ContentTypeRepoPort,
    time: TimePort,
) -> ContentTypeOutput:
    """Update title, slug, description and optionally fields of an owned type."""
    errors = _validate_required(inp.title, inp.slug, inp.description)
    if errors:
        return _failed(*errors)

    updates: dict[str, Any] = {
        "title": str(inp.title).strip(),
        "name": str(inp.slug).strip(),
        "description": str(inp.description).strip(),
        "updated_at": time.now_utc(),
    }

    if inp.fields is not None:
        fields, field_errors = parse_fields(inp.fields)
        if field_errors:
            return _failed(*field_errors)
        updates["fields"] = [f.model_dump() for f in fields]

    ownership_error = _check_owned(inp.type_id, inp.owner_id, repo)
    if ownership_error is not None:
        return _failed(ownership_error)

    try:
        saved = repo.update(inp.type_id, updates, owner_id=inp.owner_id)
    except PlatformError as e:
        return _failed(_upstream(e))

    if saved is None:
        return _failed(_not_found())

    return ContentTypeOutput(content_type=saved)


def run_delete(
    inp: DeleteContentTypeInput,
    *,
    repo: ContentTypeRepoPort,
) -> ContentTypeOutput:
    """Delete an owned type. Its content items are left in place."""
    ownership_error = _check_owned(inp.type_id, inp.owner_id, repo)
    if ownership_error is not None:
        return _failed(ownership_error)

    try:
        deleted = repo.delete(inp.type_id, owner_id=inp.owner_id)
    except PlatformError as e:
        return _failed(_upstream(e))

    if not deleted:
        return _failed(_not_found())

    return ContentTypeOutput(content_type=None)
