"""The shared tools directory."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from knowledge.access import authorize_tool_mutation
from knowledge.app.auth import require_reader, require_shared_resource_editor
from knowledge.app.models import ToolRequest, DeleteResponse
from knowledge.db.tools import (
    get_all_tools,
    get_tool_by_id,
    create_tool,
    update_tool,
    delete_tool,
)
from knowledge.models import Tool, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_model=list[Tool])
def read_tools(_user: User = Depends(require_reader)) -> list[Tool]:
    """Get all tools with their creator's name, newest first."""
    return get_all_tools()


@router.post("", status_code=201, response_model=Tool)
def create_tool_endpoint(
    request: ToolRequest,
    user: User = Depends(require_shared_resource_editor),
) -> Tool:
    try:
        return create_tool(
            request.name, request.url, created_by=user.id, description=request.description
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{tool_id}", response_model=Tool)
def update_tool_endpoint(
    tool_id: UUID,
    request: ToolRequest,
    user: User = Depends(require_shared_resource_editor),
) -> Tool:
    """Update a tool. Editors may only change tools they created."""
    authorize_tool_mutation(_get_tool(tool_id), user)
    try:
        tool = update_tool(
            tool_id, request.name, request.url, description=request.description
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if tool is None:
        raise HTTPException(status_code=404, detail="Tool not found")
    return tool


@router.delete("/{tool_id}", response_model=DeleteResponse)
def delete_tool_endpoint(
    tool_id: UUID,
    user: User = Depends(require_shared_resource_editor),
) -> DeleteResponse:
    authorize_tool_mutation(_get_tool(tool_id), user)
    if not delete_tool(tool_id):
        raise HTTPException(status_code=404, detail="Tool not found")
    logger.info(f"User {user.id} deleted tool {tool_id}")
    return DeleteResponse()


def _get_tool(tool_id: UUID) -> Tool:
    tool = get_tool_by_id(tool_id)
    if tool is None:
        raise HTTPException(status_code=404, detail="Tool not found")
    return tool
