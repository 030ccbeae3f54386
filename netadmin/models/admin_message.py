from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from netadmin.database.base import Base, DocumentIdMixin
from netadmin.models.enums import MessageAudience, value_enum


class AdminMessage(DocumentIdMixin, Base):
    """Broadcast communication from an admin to a targeted audience.

    ``read_by`` is append-only and ``sent_at`` is never cleared once set;
    both are only written through ``AdminMessageService``.
    """

    __tablename__ = "admin_messages"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    audience: Mapped[MessageAudience] = mapped_column(value_enum(MessageAudience), nullable=False)
    target_countries: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    target_regions: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    target_organizations: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    target_roles: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    delivery_channels: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    sender_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    scheduled_for: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    read_by: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_admin_messages_sent_at", "sent_at"),
        Index("ix_admin_messages_scheduled_for", "scheduled_for"),
    )
