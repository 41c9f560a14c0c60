"""
Media component - file upload to object storage plus metadata rows.

Invariants:
- I1: MIME type must be in the allowlist
- I2: Size must not exceed the upload limit
- I3: Storage keys are timestamp-prefixed original filenames
- I4: A metadata row always points at an uploaded object; a failed
  metadata insert removes the object again (best effort)
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import PurePosixPath, PureWindowsPath

from src.domain.entities import MediaItem
from src.ports.errors import PlatformError

from .models import (
    DeleteMediaInput,
    GetMediaInput,
    ListMediaInput,
    MediaListOutput,
    MediaOutput,
    MediaRulesConfig,
    MediaValidationError,
    UploadMediaInput,
)
from .ports import MediaRepoPort, ObjectStoragePort, RulesPort, TimePort

logger = logging.getLogger(__name__)

# --- Default Configuration ---

DEFAULT_RULES = MediaRulesConfig(
    allowed_mime_types=[
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/pdf",
    ],
    max_upload_bytes=50 * 1024 * 1024,  # 50MB
)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


# --- Helper Functions ---


def sanitize_filename(filename: str) -> str:
    """Strip directories and replace characters unsafe in storage keys."""
    base = PureWindowsPath(PurePosixPath(filename).name).name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "file"


def generate_storage_key(filename: str, now: datetime) -> str:
    """
    Build a collision-resistant storage key.

    Format: {epoch_millis}-{sanitized original filename}
    """
    millis = int(now.timestamp() * 1000)
    return f"{millis}-{sanitize_filename(filename)}"


def _get_rules_config(rules: RulesPort | None) -> MediaRulesConfig:
    if rules is None:
        return DEFAULT_RULES
    return MediaRulesConfig(
        allowed_mime_types=rules.get_allowed_mime_types() or DEFAULT_RULES.allowed_mime_types,
        max_upload_bytes=rules.get_max_upload_bytes() or DEFAULT_RULES.max_upload_bytes,
    )


def _upstream(err: PlatformError) -> MediaValidationError:
    return MediaValidationError(code="upstream_error", message=err.message, details=err.details)


def _not_found() -> MediaValidationError:
    return MediaValidationError(code="not_found", message="Media not found")


# --- Validation Functions ---


def validate_mime_type(mime_type: str, config: MediaRulesConfig) -> list[MediaValidationError]:
    """Validate MIME type against allowlist (I1)."""
    if mime_type in config.allowed_mime_types:
        return []
    return [
        MediaValidationError(
            code="invalid_mime_type",
            message="Invalid file type. Only images and PDFs are allowed.",
            field="file",
            details={"mime_type": mime_type, "allowed": sorted(config.allowed_mime_types)},
        )
    ]


def validate_size(size: int, config: MediaRulesConfig) -> list[MediaValidationError]:
    """Validate file size against limit (I2)."""
    if size <= config.max_upload_bytes:
        return []
    return [
        MediaValidationError(
            code="file_too_large",
            message=(
                f"File size {size} bytes exceeds maximum of {config.max_upload_bytes} bytes"
            ),
            field="file",
        )
    ]


# --- Component Entry Points ---


def run_upload(
    inp: UploadMediaInput,
    *,
    repo: MediaRepoPort,
    storage: ObjectStoragePort,
    time: TimePort,
    rules: RulesPort | None = None,
) -> MediaOutput:
    """
    Upload a file and record its metadata.

    Args:
        inp: Upload input with file bytes and metadata.
        repo: Media metadata repository.
        storage: Object storage bucket.
        time: Time port for the key prefix.
        rules: Optional upload rules.

    Returns:
        MediaOutput with the stored media row or errors.
    """
    if not inp.data:
        return MediaOutput(
            errors=[MediaValidationError(code="no_file", message="No file uploaded", field="file")],
            success=False,
        )

    config = _get_rules_config(rules)
    errors = validate_mime_type(inp.content_type, config)
    errors.extend(validate_size(len(inp.data), config))
    if errors:
        return MediaOutput(errors=errors, success=False)

    key = generate_storage_key(inp.filename, time.now_utc())

    try:
        storage.upload(key, inp.data, inp.content_type)
        url = storage.get_public_url(key)
    except PlatformError as e:
        return MediaOutput(errors=[_upstream(e)], success=False)

    media = MediaItem(
        filename=key,
        originalname=inp.filename,
        mimetype=inp.content_type,
        size=len(inp.data),
        url=url,
        owner_id=inp.owner_id,
        description=inp.description,
        alt_text=inp.alt_text,
    )

    try:
        saved = repo.insert(media)
    except PlatformError as e:
        try:
            storage.remove([key])
        except PlatformError as cleanup_error:
            logger.warning("Orphaned media object %s: %s", key, cleanup_error.message)
        return MediaOutput(errors=[_upstream(e)], success=False)

    return MediaOutput(media=saved)


def run_get(
    inp: GetMediaInput,
    *,
    repo: MediaRepoPort,
) -> MediaOutput:
    """Get one of the caller's media rows."""
    try:
        media = repo.get_by_id(inp.media_id, owner_id=inp.owner_id)
    except PlatformError as e:
        return MediaOutput(errors=[_upstream(e)], success=False)

    if media is None:
        return MediaOutput(errors=[_not_found()], success=False)
    return MediaOutput(media=media)


def run_list(
    inp: ListMediaInput,
    *,
    repo: MediaRepoPort,
) -> MediaListOutput:
    """List the caller's media, newest first."""
    try:
        items = repo.list(owner_id=inp.owner_id, limit=inp.limit, offset=inp.offset)
    except PlatformError as e:
        return MediaListOutput(
            limit=inp.limit, offset=inp.offset, errors=[_upstream(e)], success=False
        )
    return MediaListOutput(items=items, limit=inp.limit, offset=inp.offset)


def run_delete(
    inp: DeleteMediaInput,
    *,
    repo: MediaRepoPort,
    storage: ObjectStoragePort,
) -> MediaOutput:
    """Remove the stored object, then its metadata row."""
    try:
        media = repo.get_by_id(inp.media_id, owner_id=inp.owner_id)
    except PlatformError as e:
        return MediaOutput(errors=[_upstream(e)], success=False)

    if media is None:
        return MediaOutput(errors=[_not_found()], success=False)

    try:
        storage.remove([media.filename])
        deleted = repo.delete(inp.media_id, owner_id=inp.owner_id)
    except PlatformError as e:
        return MediaOutput(errors=[_upstream(e)], success=False)

    if not deleted:
        return MediaOutput(errors=[_not_found()], success=False)
    return MediaOutput(media=None)
