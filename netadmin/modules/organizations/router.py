"""Organization governance API router."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.database.session import get_db
from netadmin.models.enums import OrganizationStatus
from netadmin.modules.audit.service import client_info
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.dependencies import require_admin
from netadmin.modules.organizations.schemas import (
    ComplianceReviewRequest,
    OrganizationResponse,
    StatusChangeRequest,
)
from netadmin.modules.organizations.service import OrganizationService

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("", response_model=list[OrganizationResponse])
async def list_organizations(
    status: OrganizationStatus | None = Query(None),
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Organizations inside the caller's scope."""
    return await OrganizationService(db).list_organizations(ctx, status=status)


@router.get("/{org_id}", response_model=OrganizationResponse)
async def get_organization(
    org_id: str,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await OrganizationService(db).get_organization(org_id, ctx)


@router.post("/{org_id}/approve", response_model=OrganizationResponse)
async def approve_organization(
    org_id: str,
    request: Request,
    body: StatusChangeRequest | None = None,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    svc = OrganizationService(db, audit_options=client_info(request))
    return await svc.approve_organization(org_id, ctx, reason=body.reason if body else None)


@router.post("/{org_id}/suspend", response_model=OrganizationResponse)
async def suspend_organization(
    org_id: str,
    request: Request,
    body: StatusChangeRequest | None = None,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    svc = OrganizationService(db, audit_options=client_info(request))
    return await svc.suspend_organization(org_id, ctx, reason=body.reason if body else None)


@router.post("/{org_id}/compliance", response_model=OrganizationResponse)
async def review_compliance(
    org_id: str,
    body: ComplianceReviewRequest,
    request: Request,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    svc = OrganizationService(db, audit_options=client_info(request))
    return await svc.review_compliance(org_id, ctx, approved=body.approved, notes=body.notes)
