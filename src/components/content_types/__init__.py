"""
Content type component - user-defined content schemas.
"""

from .component import (
    DEFAULT_FIELDS,
    parse_fields,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_update,
)
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

__all__ = [
    "DEFAULT_FIELDS",
    "parse_fields",
    "run_create",
    "run_delete",
    "run_get",
    "run_list",
    "run_update",
    "ContentTypeError",
    "ContentTypeListOutput",
    "ContentTypeOutput",
    "CreateContentTypeInput",
    "DeleteContentTypeInput",
    "GetContentTypeInput",
    "ListContentTypesInput",
    "UpdateContentTypeInput",
    "ContentTypeRepoPort",
    "RulesPort",
    "TimePort",
]
