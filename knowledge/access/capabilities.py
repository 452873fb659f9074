from knowledge.models import User
from knowledge.models.capabilities import CapabilitySet, Capability


_ROLE_CAPABILITIES: dict[str, CapabilitySet] = {
    "admin": CapabilitySet(
        can_upload=True,
        can_edit=True,
        can_delete=True,
        can_manage_users=True,
        can_read=True,
    ),
    "editor": CapabilitySet(
        can_upload=True,
        can_edit=True,
        can_delete=False,
        can_manage_users=False,
        can_read=True,
    ),
    "viewer": CapabilitySet(
        can_upload=False,
        can_edit=False,
        can_delete=False,
        can_manage_users=False,
        can_read=True,
    ),
}

NO_CAPABILITIES = CapabilitySet()


def resolve_capabilities(role: str | None = None) -> CapabilitySet:
    """Get the capabilities granted to a role.

    Defined for every input: a missing or unrecognized role gets nothing,
    not even read access.
    """
    if not isinstance(role, str):
        return NO_CAPABILITIES
    return _ROLE_CAPABILITIES.get(role, NO_CAPABILITIES)


def user_capabilities(user: User | None) -> CapabilitySet:
    """Get the capabilities of a user. An anonymous caller (None) gets nothing."""
    if user is None:
        return NO_CAPABILITIES
    return resolve_capabilities(user.role)


def has_capability(user: User | None, capability: Capability) -> bool:
    return user_capabilities(user).allows(capability)
