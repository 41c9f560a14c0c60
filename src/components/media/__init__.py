"""
Media component - Upload, listing and removal of media files.
"""

from .component import (
    DEFAULT_RULES,
    generate_storage_key,
    run_delete,
    run_get,
    run_list,
    run_upload,
    sanitize_filename,
    validate_mime_type,
    validate_size,
)
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

__all__ = [
    "DEFAULT_RULES",
    "generate_storage_key",
    "run_delete",
    "run_get",
    "run_list",
    "run_upload",
    "sanitize_filename",
    "validate_mime_type",
    "validate_size",
    "DeleteMediaInput",
    "GetMediaInput",
    "ListMediaInput",
    "MediaListOutput",
    "MediaOutput",
    "MediaRulesConfig",
    "MediaValidationError",
    "UploadMediaInput",
    "MediaRepoPort",
    "ObjectStoragePort",
    "RulesPort",
    "TimePort",
]
