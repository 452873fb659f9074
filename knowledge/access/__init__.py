from .capabilities import (
    resolve_capabilities,
    user_capabilities,
    has_capability,
)
from .visibility import normalize_visibility, is_visible, visibility_allows
from .guard import AccessError, AuthorizationDenied, require_capability
from .service import (
    SHARED_RESOURCE_CAPABILITY,
    can_view,
    list_visible,
    visibility_filter_sql,
    authorize_edit,
    authorize_delete,
    authorize_tool_mutation,
    authorize_template_mutation,
    authorize_note_access,
)

__all__ = [
    "resolve_capabilities",
    "user_capabilities",
    "has_capability",
    "normalize_visibility",
    "is_visible",
    "visibility_allows",
    "AccessError",
    "AuthorizationDenied",
    "require_capability",
    "SHARED_RESOURCE_CAPABILITY",
    "can_view",
    "list_visible",
    "visibility_filter_sql",
    "authorize_edit",
    "authorize_delete",
    "authorize_tool_mutation",
    "authorize_template_mutation",
    "authorize_note_access",
]
