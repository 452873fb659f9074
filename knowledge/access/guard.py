import logging

from knowledge.models import User
from knowledge.models.capabilities import Capability
from .capabilities import has_capability

logger = logging.getLogger(__name__)


class AccessError(Exception):
    """Base class for access-control failures."""

    pass


class AuthorizationDenied(AccessError):
    """Raised when a user lacks the capability (or ownership) an action needs.

    Callers translate this into a 403 response; it is never retried.
    """

    def __init__(self, capability: str, reason: str | None = None):
        self.capability = capability
        self.reason = reason
        message = reason or f"Permission denied: {capability} required"
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


def require_capability(user: User | None, capability: Capability) -> None:
    """Raise AuthorizationDenied unless the user's role grants `capability`.

    Call this before performing any mutating action.
    """
    if not has_capability(user, capability):
        logger.warning(
            f"User {user.id if user else None} denied capability {capability}"
        )
        raise AuthorizationDenied(capability)
