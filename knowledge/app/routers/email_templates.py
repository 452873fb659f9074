"""Shared email templates."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from knowledge.access import authorize_template_mutation
from knowledge.app.auth import require_reader, require_shared_resource_editor
from knowledge.app.models import EmailTemplateRequest, DeleteResponse
from knowledge.db.email_templates import (
    get_all_email_templates,
    get_email_template_by_id,
    create_email_template,
    update_email_template,
    delete_email_template,
)
from knowledge.models import EmailTemplate, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/email-templates", tags=["email-templates"])


@router.get("", response_model=list[EmailTemplate])
def read_email_templates(
    _user: User = Depends(require_reader),
) -> list[EmailTemplate]:
    return get_all_email_templates()


@router.post("", status_code=201, response_model=EmailTemplate)
def create_email_template_endpoint(
    request: EmailTemplateRequest,
    user: User = Depends(require_shared_resource_editor),
) -> EmailTemplate:
    try:
        return create_email_template(
            request.name, request.subject, request.body, created_by=user.id
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{template_id}", response_model=EmailTemplate)
def update_email_template_endpoint(
    template_id: UUID,
    request: EmailTemplateRequest,
    user: User = Depends(require_shared_resource_editor),
) -> EmailTemplate:
    """Update a template. Editors may only change templates they created."""
    authorize_template_mutation(_get_template(template_id), user)
    try:
        template = update_email_template(
            template_id, request.name, request.subject, request.body
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if template is None:
        raise HTTPException(status_code=404, detail="Email template not found")
    return template


@router.delete("/{template_id}", response_model=DeleteResponse)
def delete_email_template_endpoint(
    template_id: UUID,
    user: User = Depends(require_shared_resource_editor),
) -> DeleteResponse:
    authorize_template_mutation(_get_template(template_id), user)
    if not delete_email_template(template_id):
        raise HTTPException(status_code=404, detail="Email template not found")
    logger.info(f"User {user.id} deleted email template {template_id}")
    return DeleteResponse()


def _get_template(template_id: UUID) -> EmailTemplate:
    template = get_email_template_by_id(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Email template not found")
    return template
