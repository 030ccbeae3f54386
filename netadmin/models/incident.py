from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from netadmin.database.base import Base, DocumentIdMixin, TimestampMixin
from netadmin.models.enums import IncidentPriority, IncidentStatus, IncidentType, value_enum


class Incident(DocumentIdMixin, TimestampMixin, Base):
    __tablename__ = "incidents"

    organization_id: Mapped[str | None] = mapped_column(String(64))
    # Denormalized from the organization so scope checks need no join
    organization_country: Mapped[str | None] = mapped_column(String(100))
    organization_region: Mapped[str | None] = mapped_column(String(100))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[IncidentType] = mapped_column(value_enum(IncidentType), nullable=False)
    priority: Mapped[IncidentPriority] = mapped_column(
        value_enum(IncidentPriority), default=IncidentPriority.MEDIUM, nullable=False
    )
    status: Mapped[IncidentStatus] = mapped_column(
        value_enum(IncidentStatus), default=IncidentStatus.OPEN, nullable=False
    )
    minors_involved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    reported_by: Mapped[str] = mapped_column(String(64), nullable=False)
    assigned_to: Mapped[str | None] = mapped_column(String(64))
    assigned_to_name: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[list] = mapped_column(JSONB, nullable=False, server_default=text("'[]'::jsonb"), default=list)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_incidents_organization_id", "organization_id"),
        Index("ix_incidents_status", "status"),
    )
