from typing import Any

from fastapi import APIRouter, Depends, Query, status

from src.api.deps import (
    ContentTypeRulesAdapter,
    Page,
    get_clock,
    get_content_repo,
    get_content_type_repo,
    get_content_type_rules,
    get_current_user,
    get_page,
)
from src.api.envelope import envelope, raise_for_errors
from src.api.schemas import ContentItemRequest, ContentStatusRequest, ContentTypeRequest
from src.components import content_types
from src.components.content import (
    CreateContentInput,
    DeleteContentInput,
    GetContentInput,
    GetPublishedInput,
    ListContentInput,
    ListPublishedInput,
    TransitionContentInput,
    UpdateContentInput,
    run_create,
    run_delete,
    run_get,
    run_get_published,
    run_list,
    run_list_published,
    run_transition,
    run_update,
)
from src.components.content.ports import ContentRepoPort, TimePort
from src.components.content_types.ports import ContentTypeRepoPort
from src.domain.entities import Principal
from src.domain.normalize import split_payload

router = APIRouter()


# --- Public (no credential) ---
# Registered first so "/public/..." never reaches the "/{content_id}" routes.


@router.get("/public/posts")
def list_published(
    type_id: str | None = None,
    page: Page = Depends(get_page),
    repo: ContentRepoPort = Depends(get_content_repo),
    time: TimePort = Depends(get_clock),
) -> dict[str, Any]:
    """Published content, including scheduled items whose time has come."""
    inp = ListPublishedInput(type_id=type_id, limit=page.limit, offset=page.offset)
    result = run_list_published(inp, repo=repo, time=time)
    raise_for_errors(result.errors)
    return envelope("Published contents retrieved successfully", contents=result.items)


@router.get("/public/posts/{content_id}")
def get_published(
    content_id: str,
    repo: ContentRepoPort = Depends(get_content_repo),
    time: TimePort = Depends(get_clock),
) -> dict[str, Any]:
    result = run_get_published(GetPublishedInput(content_id=content_id), repo=repo, time=time)
    raise_for_errors(result.errors)
    return envelope("Published content retrieved successfully", content=result.content)


# --- Content types ---


@router.post("/types", status_code=status.HTTP_201_CREATED)
def create_content_type(
    req: ContentTypeRequest,
    current_user: Principal = Depends(get_current_user),
    repo: ContentTypeRepoPort = Depends(get_content_type_repo),
    time: TimePort = Depends(get_clock),
    rules: ContentTypeRulesAdapter = Depends(get_content_type_rules),
) -> dict[str, Any]:
    inp = content_types.CreateContentTypeInput(
        owner_id=current_user.id,
        title=req.title,
        slug=req.slug,
        description=req.description,
        fields=req.fields,
    )
    result = content_types.run_create(inp, repo=repo, time=time, rules=rules)
    raise_for_errors(result.errors)
    return envelope("Content type created successfully", contentType=result.content_type)


@router.get("/types")
def list_content_types(
    current_user: Principal = Depends(get_current_user),
    repo: ContentTypeRepoPort = Depends(get_content_type_repo),
) -> dict[str, Any]:
    """The caller's content types plus public ones."""
    inp = content_types.ListContentTypesInput(owner_id=current_user.id)
    result = content_types.run_list(inp, repo=repo)
    raise_for_errors(result.errors)
    return envelope("Content types retrieved successfully", contentTypes=result.items)


@router.get("/types/{type_id}")
def get_content_type(
    type_id: str,
    current_user: Principal = Depends(get_current_user),
    repo: ContentTypeRepoPort = Depends(get_content_type_repo),
) -> dict[str, Any]:
    inp = content_types.GetContentTypeInput(type_id=type_id, owner_id=current_user.id)
    result = content_types.run_get(inp, repo=repo)
    raise_for_errors(result.errors)
    return envelope("Content type retrieved successfully", contentType=result.content_type)


@router.put("/types/{type_id}")
def update_content_type(
    type_id: str,
    req: ContentTypeRequest,
    current_user: Principal = Depends(get_current_user),
    repo: ContentTypeRepoPort = Depends(get_content_type_repo),
    time: TimePort = Depends(get_clock),
) -> dict[str, Any]:
    inp = content_types.UpdateContentTypeInput(
        type_id=type_id,
        owner_id=current_user.id,
        title=req.title,
        slug=req.slug,
        description=req.description,
        fields=req.fields,
    )
    result = content_types.run_update(inp, repo=repo, time=time)
    raise_for_errors(result.errors)
    return envelope("Content type updated successfully", contentType=result.content_type)


@router.delete("/types/{type_id}")
def delete_content_type(
    type_id: str,
    current_user: Principal = Depends(get_current_user),
    repo: ContentTypeRepoPort = Depends(get_content_type_repo),
) -> dict[str, Any]:
    """Delete an owned type. Its content items are kept."""
    inp = content_types.DeleteContentTypeInput(type_id=type_id, owner_id=current_user.id)
    result = content_types.run_delete(inp, repo=repo)
    raise_for_errors(result.errors)
    return envelope("Content type deleted successfully")


@router.post("/types/{type_id}", status_code=status.HTTP_201_CREATED)
def create_content(
    type_id: str,
    req: ContentItemRequest,
    current_user: Principal = Depends(get_current_user),
    repo: ContentRepoPort = Depends(get_content_repo),
    types: ContentTypeRepoPort = Depends(get_content_type_repo),
    time: TimePort = Depends(get_clock),
) -> dict[str, Any]:
    """Create a content item of the given type."""
    inp = CreateContentInput(
        type_id=type_id,
        owner_id=current_user.id,
        data=split_payload(req.payload()),
        status=req.status,
        scheduled_at=req.scheduled_at,
    )
    result = run_create(inp, repo=repo, types=types, time=time)
    raise_for_errors(result.errors)
    return envelope("Content created successfully", content=result.content)


# --- Content items ---


def _list_owned(
    current_user: Principal,
    repo: ContentRepoPort,
    page: Page,
    type_id: str | None,
    status_filter: str | None,
) -> dict[str, Any]:
    inp = ListContentInput(
        owner_id=current_user.id,
        type_id=type_id,
        status=status_filter,
        limit=page.limit,
        offset=page.offset,
    )
    result = run_list(inp, repo=repo)
    raise_for_errors(result.errors)
    return envelope("Contents retrieved successfully", contents=result.items)


@router.get("")
def list_contents(
    type_id: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    current_user: Principal = Depends(get_current_user),
    repo: ContentRepoPort = Depends(get_content_repo),
    page: Page = Depends(get_page),
) -> dict[str, Any]:
    """The caller's content, newest first."""
    return _list_owned(current_user, repo, page, type_id, status_filter)


@router.get("/type/{type_id}")
def list_contents_by_type(
    type_id: str,
    status_filter: str | None = Query(None, alias="status"),
    current_user: Principal = Depends(get_current_user),
    repo: ContentRepoPort = Depends(get_content_repo),
    page: Page = Depends(get_page),
) -> dict[str, Any]:
    return _list_owned(current_user, repo, page, type_id, status_filter)


@router.get("/{content_id}")
def get_content(
    content_id: str,
    current_user: Principal = Depends(get_current_user),
    repo: ContentRepoPort = Depends(get_content_repo),
) -> dict[str, Any]:
    result = run_get(GetContentInput(content_id=content_id, owner_id=current_user.id), repo=repo)
    raise_for_errors(result.errors)
    return envelope("Content retrieved successfully", content=result.content)


@router.put("/{content_id}")
def update_content(
    content_id: str,
    req: ContentItemRequest,
    replace: bool = False,
    current_user: Principal = Depends(get_current_user),
    repo: ContentRepoPort = Depends(get_content_repo),
    time: TimePort = Depends(get_clock),
) -> dict[str, Any]:
    """Update the data payload; status changes go through /verify."""
    inp = UpdateContentInput(
        content_id=content_id,
        owner_id=current_user.id,
        data=split_payload(req.payload()),
        replace=replace,
    )
    result = run_update(inp, repo=repo, time=time)
    raise_for_errors(result.errors)
    return envelope("Content updated successfully", content=result.content)


@router.put("/{content_id}/verify")
def verify_content(
    content_id: str,
    req: ContentStatusRequest,
    current_user: Principal = Depends(get_current_user),
    repo: ContentRepoPort = Depends(get_content_repo),
    time: TimePort = Depends(get_clock),
) -> dict[str, Any]:
    """Move an item to draft, scheduled or published."""
    inp = TransitionContentInput(
        content_id=content_id,
        owner_id=current_user.id,
        status=req.status,
        scheduled_at=req.scheduled_at,
    )
    result = run_transition(inp, repo=repo, time=time)
    raise_for_errors(result.errors)
    return envelope(f"Content {req.status} successfully", content=result.content)


@router.delete("/{content_id}")
def delete_content(
    content_id: str,
    current_user: Principal = Depends(get_current_user),
    repo: ContentRepoPort = Depends(get_content_repo),
) -> dict[str, Any]:
    inp = DeleteContentInput(content_id=content_id, owner_id=current_user.id)
    result = run_delete(inp, repo=repo)
    raise_for_errors(result.errors)
    return envelope("Content deleted successfully")
