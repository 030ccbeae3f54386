"""Audit log API router: read-only access for super and country admins."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.config import settings
from netadmin.database.session import get_db
from netadmin.exceptions import ValidationException
from netadmin.models.enums import AuditAction, AuditTargetType
from netadmin.modules.audit.constants import CRITICAL_LOG_LIMIT, RECENT_LOG_LIMIT
from netadmin.modules.audit.schemas import AuditLogQuery, AuditLogResponse
from netadmin.modules.audit.service import AuditLogService
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.dependencies import require_capability
from netadmin.modules.governance.permissions import can_view_audit_logs

router = APIRouter(prefix="/audit-logs", tags=["audit"])

_require_audit_access = require_capability(can_view_audit_logs, "view audit logs")


@router.get("", response_model=list[AuditLogResponse])
async def list_audit_logs(
    user_id: str | None = Query(None),
    action: AuditAction | None = Query(None),
    target_id: str | None = Query(None),
    target_type: AuditTargetType | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    limit: int = Query(settings.audit_log_default_limit, ge=1, le=settings.audit_log_max_limit),
    _ctx: AdminContext = Depends(_require_audit_access),
    db: AsyncSession = Depends(get_db),
):
    """Filtered audit entries, newest first."""
    try:
        query = AuditLogQuery(
            user_id=user_id,
            action=action,
            target_id=target_id,
            target_type=target_type,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
        )
    except ValidationError as exc:
        details = [{"message": err["msg"]} for err in exc.errors()]
        raise ValidationException("Invalid audit log filters", details=details) from exc
    svc = AuditLogService(db)
    return await svc.get_audit_logs(query)


@router.get("/recent", response_model=list[AuditLogResponse])
async def recent_audit_logs(
    limit: int = Query(RECENT_LOG_LIMIT, ge=1, le=settings.audit_log_max_limit),
    _ctx: AdminContext = Depends(_require_audit_access),
    db: AsyncSession = Depends(get_db),
):
    return await AuditLogService(db).get_recent_audit_logs(limit)


@router.get("/critical", response_model=list[AuditLogResponse])
async def critical_audit_logs(
    limit: int = Query(CRITICAL_LOG_LIMIT, ge=1, le=settings.audit_log_max_limit),
    _ctx: AdminContext = Depends(_require_audit_access),
    db: AsyncSession = Depends(get_db),
):
    """Role changes, suspensions and settings changes only."""
    return await AuditLogService(db).get_critical_audit_logs(limit)


@router.get("/organizations/{org_id}", response_model=list[AuditLogResponse])
async def organization_audit_logs(
    org_id: str,
    limit: int = Query(50, ge=1, le=settings.audit_log_max_limit),
    _ctx: AdminContext = Depends(_require_audit_access),
    db: AsyncSession = Depends(get_db),
):
    return await AuditLogService(db).get_organization_audit_logs(org_id, limit)


@router.get("/users/{user_id}", response_model=list[AuditLogResponse])
async def user_audit_logs(
    user_id: str,
    limit: int = Query(50, ge=1, le=settings.audit_log_max_limit),
    _ctx: AdminContext = Depends(_require_audit_access),
    db: AsyncSession = Depends(get_db),
):
    return await AuditLogService(db).get_user_audit_logs(user_id, limit)
