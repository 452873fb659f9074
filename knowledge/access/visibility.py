"""Document visibility: normalization of the stored flag and the visibility rule.

The `documents.is_public` flag predates a strict schema, so rows carry loose
encodings. `True`, `"true"`, NULL and a missing value all mean public; `False`
and `"false"` mean private. Anything else is "unknown", which nobody can see,
admins included.

The database's own row policy for documents is permissive, so listings must
filter their results through this module even when the query already did.
"""

from uuid import UUID

from knowledge.models import User
from knowledge.models.document import Visibility
from .capabilities import user_capabilities

_MISSING = object()


def normalize_visibility(raw: object = _MISSING) -> Visibility:
    """Map a stored visibility value onto public, private or unknown.

    Booleans are compared by identity so that 0 and 1 are not taken for
    False and True.
    """
    if raw is _MISSING or raw is None or raw is True:
        return "public"
    if raw is False:
        return "private"
    if isinstance(raw, str):
        if raw == "true":
            return "public"
        if raw == "false":
            return "private"
    return "unknown"


def visibility_allows(
    visibility: Visibility, owner_id: UUID | str | None, viewer: User | None
) -> bool:
    """Decide visibility for an already-normalized value."""
    if viewer is None or not user_capabilities(viewer).can_read:
        return False
    if visibility == "public":
        return True
    if visibility == "private":
        return viewer.is_admin or _same_id(owner_id, viewer.id)
    return False


def is_visible(
    visibility_raw: object, owner_id: UUID | str | None, viewer: User | None
) -> bool:
    """Check whether `viewer` may see a document with the given stored flag and owner."""
    return visibility_allows(normalize_visibility(visibility_raw), owner_id, viewer)


def _same_id(owner_id: UUID | str | None, user_id: UUID) -> bool:
    if owner_id is None:
        return False
    return str(owner_id) == str(user_id)
