"""Task ORM model. Table: task."""

from datetime import date

from sqlalchemy import Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.domain.enums import Priority, TaskStatus
from taskboard.infrastructure.persistence.database import Base
from taskboard.infrastructure.persistence.models.mixins import CreatedAtMixin


class Task(CreatedAtMixin, Base):
    """To-do task. Status and priority are stored as their enum values."""

    __tablename__ = "task"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TaskStatus.PENDING.value,
        server_default=TaskStatus.PENDING.value,
    )
    priority: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=Priority.MEDIUM.value,
        server_default=Priority.MEDIUM.value,
    )
    category: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (Index("ix_task_status_priority", "status", "priority"),)
