"""Reusable column mixins for ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from taskboard.shared.utils.datetime import utc_now


class CreatedAtMixin:
    """Adds created_at (aware UTC).

    The value is assigned in Python at insert so it is readable right after
    flush; the server default covers rows written outside the ORM.
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), default=utc_now, server_default=func.now()
        )
