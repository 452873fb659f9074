from .user import UserFactory
from .document import DocumentFactory, DocumentVersionFactory
from .shared import NoteFactory, EmailTemplateFactory, ToolFactory

__all__ = [
    "UserFactory",
    "DocumentFactory",
    "DocumentVersionFactory",
    "NoteFactory",
    "EmailTemplateFactory",
    "ToolFactory",
]
