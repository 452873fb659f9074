from .documents import router as documents_router
from .search import router as search_router
from .files import router as files_router
from .notes import router as notes_router
from .email_templates import router as email_templates_router
from .tools import router as tools_router
from .users import router as users_router
from .analytics import router as analytics_router

__all__ = [
    "documents_router",
    "search_router",
    "files_router",
    "notes_router",
    "email_templates_router",
    "tools_router",
    "users_router",
    "analytics_router",
]
