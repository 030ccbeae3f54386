from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from netadmin.database.base import Base, DocumentIdMixin, TimestampMixin
from netadmin.models.enums import ComplianceStatus, OrganizationStatus, value_enum


class Organization(DocumentIdMixin, TimestampMixin, Base):
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str | None] = mapped_column(String(100))
    region: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[OrganizationStatus] = mapped_column(
        value_enum(OrganizationStatus), default=OrganizationStatus.PENDING, nullable=False
    )
    compliance_status: Mapped[ComplianceStatus] = mapped_column(
        value_enum(ComplianceStatus), default=ComplianceStatus.NOT_SUBMITTED, nullable=False
    )

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_organizations_country", "country"),
        Index("ix_organizations_region", "region"),
    )
