"""OAuth authentication and capability-based authorization."""

from .oauth import (
    get_current_user,
    require,
    require_reader,
    require_uploader,
    require_editor,
    require_deleter,
    require_user_manager,
    require_shared_resource_editor,
)

# Export for use in routers
__all__ = [
    "get_current_user",
    "require",
    "require_reader",
    "require_uploader",
    "require_editor",
    "require_deleter",
    "require_user_manager",
    "require_shared_resource_editor",
]
