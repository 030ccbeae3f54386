"""Pydantic v2 schemas for incident reporting."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from netadmin.models.enums import IncidentPriority, IncidentStatus, IncidentType


class IncidentCreate(BaseModel):
    organization_id: str | None = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    type: IncidentType
    priority: IncidentPriority = IncidentPriority.MEDIUM
    minors_involved: bool = False


class IncidentNoteCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class IncidentAssignRequest(BaseModel):
    assigned_to: str
    assigned_to_name: str


class IncidentStatusRequest(BaseModel):
    status: IncidentStatus


class IncidentPriorityRequest(BaseModel):
    priority: IncidentPriority


class IncidentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: str | None = None
    organization_country: str | None = None
    organization_region: str | None = None
    title: str
    description: str
    type: IncidentType
    priority: IncidentPriority
    status: IncidentStatus
    minors_involved: bool
    reported_by: str
    assigned_to: str | None = None
    assigned_to_name: str | None = None
    notes: list[dict[str, Any]] = []
    resolved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class IncidentStatsResponse(BaseModel):
    total: int
    open: int
    high_priority: int
    with_minors: int


class IncidentNoteResponse(BaseModel):
    id: str
    author_id: str
    author_name: str
    content: str
    timestamp: datetime
