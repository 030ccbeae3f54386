"""Incident reporting API router."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.database.session import get_db
from netadmin.models.enums import IncidentPriority, IncidentStatus
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.dependencies import get_admin_context, require_admin
from netadmin.modules.incidents.schemas import (
    IncidentAssignRequest,
    IncidentCreate,
    IncidentNoteCreate,
    IncidentNoteResponse,
    IncidentPriorityRequest,
    IncidentResponse,
    IncidentStatsResponse,
    IncidentStatusRequest,
)
from netadmin.modules.incidents.service import IncidentService
from netadmin.modules.organizations.service import OrganizationService

router = APIRouter(prefix="/incidents", tags=["incidents"])


@router.post("", response_model=IncidentResponse, status_code=201)
async def report_incident(
    body: IncidentCreate,
    ctx: AdminContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    """Report an incident. Any authenticated user may report."""
    return await IncidentService(db).create_incident(body, ctx)


@router.get("", response_model=list[IncidentResponse])
async def list_incidents(
    status: IncidentStatus | None = Query(None),
    priority: IncidentPriority | None = Query(None),
    minors_involved: bool | None = Query(None),
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await IncidentService(db).list_incidents(
        ctx, status=status, priority=priority, minors_involved=minors_involved
    )


@router.get("/organizations/{org_id}/stats", response_model=IncidentStatsResponse)
async def organization_incident_stats(
    org_id: str,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await OrganizationService(db).get_organization(org_id, ctx)
    return await IncidentService(db).get_organization_incident_stats(org_id)


@router.get("/{incident_id}", response_model=IncidentResponse)
async def get_incident(
    incident_id: str,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await IncidentService(db).get_incident(incident_id, ctx)


@router.post("/{incident_id}/notes", response_model=IncidentNoteResponse, status_code=201)
async def add_note(
    incident_id: str,
    body: IncidentNoteCreate,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await IncidentService(db).add_incident_note(incident_id, body.content, ctx)


@router.post("/{incident_id}/assign", response_model=IncidentResponse)
async def assign_incident(
    incident_id: str,
    body: IncidentAssignRequest,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await IncidentService(db).assign_incident(
        incident_id, body.assigned_to, body.assigned_to_name, ctx
    )


@router.post("/{incident_id}/status", response_model=IncidentResponse)
async def update_status(
    incident_id: str,
    body: IncidentStatusRequest,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await IncidentService(db).update_incident_status(incident_id, body.status, ctx)


@router.post("/{incident_id}/priority", response_model=IncidentResponse)
async def update_priority(
    incident_id: str,
    body: IncidentPriorityRequest,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await IncidentService(db).update_incident_priority(incident_id, body.priority, ctx)
