from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from src.api.deps import (
    MediaRulesAdapter,
    Page,
    get_clock,
    get_current_user,
    get_media_repo,
    get_media_rules,
    get_object_storage,
    get_page,
)
from src.api.envelope import envelope, raise_for_errors
from src.components.media import (
    DeleteMediaInput,
    GetMediaInput,
    ListMediaInput,
    MediaRepoPort,
    ObjectStoragePort,
    TimePort,
    UploadMediaInput,
    run_delete,
    run_get,
    run_list,
    run_upload,
)
from src.domain.entities import Principal

router = APIRouter()


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: UploadFile | None = File(None),
    description: str | None = Form(None),
    alt_text: str | None = Form(None),
    current_user: Principal = Depends(get_current_user),
    repo: MediaRepoPort = Depends(get_media_repo),
    storage: ObjectStoragePort = Depends(get_object_storage),
    time: TimePort = Depends(get_clock),
    rules: MediaRulesAdapter = Depends(get_media_rules),
) -> dict[str, Any]:
    """Upload a single file (multipart field "file")."""
    data = await file.read() if file is not None else None
    inp = UploadMediaInput(
        data=data,
        filename=(file.filename if file is not None else None) or "file",
        content_type=(file.content_type if file is not None else None)
        or "application/octet-stream",
        owner_id=current_user.id,
        description=description,
        alt_text=alt_text,
    )
    result = run_upload(inp, repo=repo, storage=storage, time=time, rules=rules)
    raise_for_errors(result.errors)
    return envelope("Media uploaded successfully", media=result.media)


@router.get("")
def list_media(
    current_user: Principal = Depends(get_current_user),
    repo: MediaRepoPort = Depends(get_media_repo),
    page: Page = Depends(get_page),
) -> dict[str, Any]:
    inp = ListMediaInput(owner_id=current_user.id, limit=page.limit, offset=page.offset)
    result = run_list(inp, repo=repo)
    raise_for_errors(result.errors)
    return envelope("Media list retrieved successfully", media=result.items)


@router.get("/{media_id}")
def get_media(
    media_id: str,
    current_user: Principal = Depends(get_current_user),
    repo: MediaRepoPort = Depends(get_media_repo),
) -> dict[str, Any]:
    result = run_get(GetMediaInput(media_id=media_id, owner_id=current_user.id), repo=repo)
    raise_for_errors(result.errors)
    return envelope("Media retrieved successfully", media=result.media)


@router.delete("/{media_id}")
def delete_media(
    media_id: str,
    current_user: Principal = Depends(get_current_user),
    repo: MediaRepoPort = Depends(get_media_repo),
    storage: ObjectStoragePort = Depends(get_object_storage),
) -> dict[str, Any]:
    """Remove the stored file and its metadata."""
    inp = DeleteMediaInput(media_id=media_id, owner_id=current_user.id)
    result = run_delete(inp, repo=repo, storage=storage)
    raise_for_errors(result.errors)
    return envelope("Media deleted successfully")
