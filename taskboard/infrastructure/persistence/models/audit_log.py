"""Audit log ORM model. Table: audit_log. Append-only record of task changes."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Connection, DateTime, Integer, String, event, func
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from taskboard.infrastructure.persistence.database import Base
from taskboard.shared.utils.datetime import utc_now


class AuditLog(Base):
    """One task mutation: what changed, on which task, when. No update/delete."""

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_name: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    old_values: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    new_values: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )


@event.listens_for(AuditLog, "before_update")
def _prevent_audit_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    raise ValueError("Audit log entries are immutable and cannot be updated.")


@event.listens_for(AuditLog, "before_delete")
def _prevent_audit_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    raise ValueError("Audit log entries cannot be deleted.")
