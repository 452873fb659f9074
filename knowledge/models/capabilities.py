from typing import Literal

from pydantic import BaseModel, ConfigDict


Capability = Literal[
    "can_upload", "can_edit", "can_delete", "can_manage_users", "can_read"
]
CAPABILITIES: tuple[Capability, ...] = (
    "can_upload",
    "can_edit",
    "can_delete",
    "can_manage_users",
    "can_read",
)


class CapabilitySet(BaseModel):
    """What a role may do. Derived from the role on every check; never stored."""

    model_config = ConfigDict(frozen=True)

    can_upload: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_manage_users: bool = False
    can_read: bool = False

    def allows(self, capability: Capability) -> bool:
        # Unrecognized capability names are never granted.
        return capability in CAPABILITIES and getattr(self, capability)
