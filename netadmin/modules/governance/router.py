"""Governance API router: lets a caller inspect its resolved scope."""

from fastapi import APIRouter, Depends

from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.dependencies import require_admin
from netadmin.modules.governance.permissions import (
    can_manage_admin_roles,
    can_send_network_wide_message,
    can_view_audit_logs,
    can_view_incidents,
)
from netadmin.modules.governance.schemas import AdminContextResponse, CapabilitiesResponse, ScopeResponse
from netadmin.modules.governance.scope import get_admin_scope

router = APIRouter(prefix="/governance", tags=["governance"])


@router.get("/context", response_model=AdminContextResponse)
async def get_context(ctx: AdminContext = Depends(require_admin)):
    """Return the caller's normalized context, query scope and context-only capabilities."""
    scope = get_admin_scope(ctx)
    return AdminContextResponse(
        user_id=ctx.user_id,
        role=ctx.role,
        country=ctx.country,
        region=ctx.region,
        organization_id=ctx.organization_id,
        scope=ScopeResponse(type=scope.type, value=scope.value),
        capabilities=CapabilitiesResponse(
            manage_admin_roles=can_manage_admin_roles(ctx),
            send_network_wide_message=can_send_network_wide_message(ctx),
            view_audit_logs=can_view_audit_logs(ctx),
            view_incidents=can_view_incidents(ctx),
        ),
    )
