"""
Content component - Content items and publication lifecycle.
"""

from .component import (
    run_create,
    run_delete,
    run_get,
    run_get_published,
    run_list,
    run_list_published,
    run_promote_due,
    run_transition,
    run_update,
    validate_required_fields,
)
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

__all__ = [
    # Entry points
    "run_create",
    "run_delete",
    "run_get",
    "run_get_published",
    "run_list",
    "run_list_published",
    "run_promote_due",
    "run_transition",
    "run_update",
    "validate_required_fields",
    # Input models
    "CreateContentInput",
    "DeleteContentInput",
    "GetContentInput",
    "GetPublishedInput",
    "ListContentInput",
    "ListPublishedInput",
    "PromoteDueInput",
    "TransitionContentInput",
    "UpdateContentInput",
    # Output models
    "ContentListOutput",
    "ContentOperationOutput",
    "ContentOutput",
    "ContentValidationError",
    "PromoteDueOutput",
    # Ports
    "ContentRepoPort",
    "ContentTypeReaderPort",
    "TimePort",
]
