from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from netadmin.database.base import Base, DocumentIdMixin
from netadmin.models.enums import AuditAction, AuditTargetType, value_enum


class AuditLog(DocumentIdMixin, Base):
    """Immutable record of a privileged action.

    ``timestamp`` comes from the database at insert time. There is no
    ``updated_at``: rows are never modified.
    """

    __tablename__ = "audit_logs"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_role: Mapped[str] = mapped_column(String(50), nullable=False)
    action: Mapped[AuditAction] = mapped_column(value_enum(AuditAction), nullable=False)
    target_id: Mapped[str | None] = mapped_column(String(64))
    target_type: Mapped[AuditTargetType | None] = mapped_column(value_enum(AuditTargetType))
    target_name: Mapped[str | None] = mapped_column(String(255))
    # "metadata" is reserved on declarative classes
    details: Mapped[dict | None] = mapped_column("metadata", JSONB)
    ip_address: Mapped[str | None] = mapped_column(String(45))
    user_agent: Mapped[str | None] = mapped_column(String(500))
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_audit_logs_timestamp", "timestamp"),
        Index("ix_audit_logs_user_id", "user_id"),
        Index("ix_audit_logs_target", "target_type", "target_id"),
        Index("ix_audit_logs_action", "action"),
    )
