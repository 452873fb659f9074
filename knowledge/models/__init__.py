from .user import User, Role, ROLES
from .document import Document, DocumentVersion, SearchResult, Visibility
from .shared import Note, EmailTemplate, Tool
from .capabilities import CapabilitySet, Capability, CAPABILITIES


__all__ = [
    "User",
    "Role",
    "ROLES",
    "Document",
    "DocumentVersion",
    "SearchResult",
    "Visibility",
    "Note",
    "EmailTemplate",
    "Tool",
    "CapabilitySet",
    "Capability",
    "CAPABILITIES",
]
