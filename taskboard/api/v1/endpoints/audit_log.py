"""Audit log API: list recorded task changes (what changed, when)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from taskboard.api.v1.dependencies import get_audit_log_repo
from taskboard.application.interfaces.repositories import IAuditLogRepository
from taskboard.domain.enums import AuditAction
from taskboard.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse

router = APIRouter()


@router.get("", response_model=AuditLogListResponse)
async def list_audit_log(
    audit_repo: Annotated[IAuditLogRepository, Depends(get_audit_log_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    entity_id: int | None = Query(None, description="Filter by task id"),
    action: AuditAction | None = Query(None, description="Filter by action"),
):
    """List audit records (paginated, optional filters). Never cached."""
    items = await audit_repo.list(
        skip=skip, limit=limit, entity_id=entity_id, action=action
    )
    total = await audit_repo.count(entity_id=entity_id, action=action)
    return AuditLogListResponse(
        items=[AuditLogEntryResponse.model_validate(e) for e in items],
        skip=skip,
        limit=limit,
        total=total,
    )
