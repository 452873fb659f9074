"""User administration and the caller's own permissions."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from knowledge.access import user_capabilities
from knowledge.app.auth import get_current_user, require_user_manager
from knowledge.app.models import UpdateRoleRequest, PermissionsResponse
from knowledge.db.users import get_all_users, update_user_role
from knowledge.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.get("/users", response_model=list[User])
def read_users(_user: User = Depends(require_user_manager)) -> list[User]:
    return get_all_users()


@router.patch("/users/{user_id}/role", response_model=User)
def update_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    user: User = Depends(require_user_manager),
) -> User:
    """Change a user's role.

    Admins cannot demote themselves, so there is always at least the caller
    left to manage users.
    """
    if user_id == user.id and request.role != "admin":
        raise HTTPException(
            status_code=400, detail="Cannot change your own role from admin"
        )

    updated = update_user_role(user_id, request.role)
    if updated is None:
        raise HTTPException(status_code=404, detail=f"User '{user_id}' not found")
    logger.info(f"User {user.id} set role of {user_id} to {request.role}")
    return updated


@router.get("/me/permissions", response_model=PermissionsResponse)
def read_my_permissions(user: User = Depends(get_current_user)) -> PermissionsResponse:
    return PermissionsResponse(role=user.role, permissions=user_capabilities(user))
