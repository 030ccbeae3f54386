"""Pydantic v2 schemas for organization governance endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from netadmin.models.enums import ComplianceStatus, OrganizationStatus


class OrganizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    country: str | None = None
    region: str | None = None
    status: OrganizationStatus
    compliance_status: ComplianceStatus
    created_at: datetime
    updated_at: datetime


class StatusChangeRequest(BaseModel):
    reason: str | None = Field(None, max_length=1000)


class ComplianceReviewRequest(BaseModel):
    approved: bool
    notes: str | None = Field(None, max_length=2000)
