"""Audit log repository. Append-only; implements IAuditLogRepository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from taskboard.domain.enums import AuditAction
from taskboard.infrastructure.persistence.models.audit_log import AuditLog
from taskboard.shared.utils.datetime import ensure_utc


def _orm_to_result(row: AuditLog) -> AuditLogResult:
    return AuditLogResult(
        id=row.id,
        entity_name=row.entity_name,
        entity_id=row.entity_id,
        action=AuditAction(row.action),
        old_values=row.old_values,
        new_values=row.new_values,
        timestamp=ensure_utc(row.timestamp),
    )


def _conditions(entity_id: int | None, action: AuditAction | None) -> list[Any]:
    conditions: list[Any] = []
    if entity_id is not None:
        conditions.append(AuditLog.entity_id == entity_id)
    if action is not None:
        conditions.append(AuditLog.action == action.value)
    return conditions


class AuditLogRepository:
    """Append-only audit log repository. No update/delete.

    create() commits its own row, like the task repository's writes.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit record; return it with id and timestamp."""
        row = AuditLog(
            entity_name=entry.entity_name,
            entity_id=entry.entity_id,
            action=entry.action.value,
            old_values=entry.old_values,
            new_values=entry.new_values,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.commit()
        return _orm_to_result(row)

    async def list(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        entity_id: int | None = None,
        action: AuditAction | None = None,
    ) -> list[AuditLogResult]:
        """List audit records, newest first, with optional filters."""
        stmt = (
            select(AuditLog)
            .where(*_conditions(entity_id, action))
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def count(
        self,
        *,
        entity_id: int | None = None,
        action: AuditAction | None = None,
    ) -> int:
        """Count audit records matching the filters."""
        stmt = (
            select(func.count())
            .select_from(AuditLog)
            .where(*_conditions(entity_id, action))
        )
        result = await self.db.execute(stmt)
        return int(result.scalar_one())
