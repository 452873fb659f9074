"""Authorization decisions for documents and shared resources.

Every function here is a pure check against the user and resource passed in.
Nothing is cached between calls.
"""

import logging
from typing import Iterable, Protocol, TypeVar
from uuid import UUID

from knowledge.models import User, Document
from knowledge.models.capabilities import Capability
from .capabilities import user_capabilities
from .guard import AuthorizationDenied, require_capability
from .visibility import visibility_allows

logger = logging.getLogger(__name__)

# Tools and email templates have no capability of their own; whoever may upload
# documents may also manage them. Change it here to re-gate both.
SHARED_RESOURCE_CAPABILITY: Capability = "can_upload"

# SQL predicates over the `documents.is_public` JSONB column, mirroring
# normalize_visibility. JSON null comes back as None, which reads as public.
PUBLIC_SQL = "(is_public IS NULL OR is_public IN ('true'::jsonb, '\"true\"'::jsonb, 'null'::jsonb))"
PRIVATE_SQL = "(is_public IN ('false'::jsonb, '\"false\"'::jsonb))"


class Owned(Protocol):
    @property
    def owner_id(self) -> UUID: ...


D = TypeVar("D", bound=Document)


def can_view(document: Document, viewer: User | None) -> bool:
    return visibility_allows(document.visibility, document.owner_id, viewer)


def list_visible(documents: Iterable[D], viewer: User | None) -> list[D]:
    """Keep only the documents `viewer` may see, preserving their order.

    Apply this to every listing, even when the query was already filtered
    with `visibility_filter_sql`.
    """
    return [doc for doc in documents if can_view(doc, viewer)]


def visibility_filter_sql(viewer: User | None) -> tuple[str, tuple]:
    """Build a WHERE fragment restricting a documents query to what `viewer` may see.

    Returns:
        The SQL fragment and its parameters.
    """
    if viewer is None or not user_capabilities(viewer).can_read:
        return "FALSE", ()
    if viewer.is_admin:
        return f"({PUBLIC_SQL} OR {PRIVATE_SQL})", ()
    return f"({PUBLIC_SQL} OR ({PRIVATE_SQL} AND created_by = %s))", (viewer.id,)


def authorize_edit(document: Document, viewer: User | None) -> None:
    """Check that `viewer` may change a document.

    Requires the edit capability. Private documents also require the viewer to
    be an admin or the owner. Documents with an unknown visibility cannot be
    edited by anyone.
    """
    require_capability(viewer, "can_edit")
    if document.visibility == "public":
        return
    if document.visibility == "private" and _is_admin_or_owner(document, viewer):
        return
    logger.warning(f"User {_user_id(viewer)} denied edit of document {document.id}")
    raise AuthorizationDenied(
        "can_edit", reason="You can only edit private documents you own"
    )


def authorize_delete(document: Document, viewer: User | None) -> None:
    """Check that `viewer` may delete a document. Role-gated only; ownership is not considered."""
    require_capability(viewer, "can_delete")


def authorize_tool_mutation(tool: Owned, viewer: User | None) -> None:
    _require_shared_owner(tool, viewer, "tools")


def authorize_template_mutation(template: Owned, viewer: User | None) -> None:
    _require_shared_owner(template, viewer, "email templates")


def authorize_note_access(note: Owned, viewer: User | None) -> None:
    """Notes are private to their owner. Admins get no exception."""
    require_capability(viewer, "can_read")
    if viewer is None or note.owner_id != viewer.id:
        raise AuthorizationDenied(
            "can_read", reason="You can only access your own notes"
        )


def _require_shared_owner(resource: Owned, viewer: User | None, noun: str) -> None:
    require_capability(viewer, SHARED_RESOURCE_CAPABILITY)
    if not _is_admin_or_owner(resource, viewer):
        logger.warning(
            f"User {_user_id(viewer)} denied change to {noun} they did not create"
        )
        raise AuthorizationDenied(
            SHARED_RESOURCE_CAPABILITY,
            reason=f"You can only change {noun} you created",
        )


def _is_admin_or_owner(resource: Owned, viewer: User | None) -> bool:
    if viewer is None:
        return False
    return viewer.is_admin or resource.owner_id == viewer.id


def _user_id(viewer: User | None) -> UUID | None:
    return viewer.id if viewer else None
