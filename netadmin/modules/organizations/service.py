"""Organization governance: scoped listing, approval, suspension, compliance review."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.database.filters import Equals, apply_filters, apply_ordering
from netadmin.exceptions import BusinessRuleException, NotFoundException, ScopeViolationException
from netadmin.models.enums import AuditAction, AuditTargetType, ComplianceStatus, OrganizationStatus
from netadmin.models.organization import Organization
from netadmin.modules.audit.service import AuditLogService
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.permissions import (
    can_approve_compliance,
    can_manage_organization,
    can_view_organization,
)
from netadmin.modules.governance.scope import get_admin_scope, scope_filters

logger = logging.getLogger(__name__)


class OrganizationService:
    def __init__(self, db: AsyncSession, audit_options: dict[str, Any] | None = None):
        self.db = db
        self.audit = AuditLogService(db)
        # ip_address / user_agent forwarded to every audit entry
        self.audit_options = audit_options or {}

    async def list_organizations(
        self, ctx: AdminContext, status: OrganizationStatus | None = None
    ) -> list[Organization]:
        """Organizations inside the caller's scope, by name."""
        filters = scope_filters(get_admin_scope(ctx))
        if filters is None:
            return []
        if status is not None:
            filters.append(Equals("status", status))

        stmt = apply_filters(select(Organization), Organization, filters)
        stmt = apply_ordering(stmt, Organization, "name", descending=False)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _load(self, org_id: str) -> Organization:
        result = await self.db.execute(select(Organization).where(Organization.id == org_id))
        org = result.scalar_one_or_none()
        if org is None:
            raise NotFoundException(f"Organization {org_id} not found")
        return org

    async def get_organization(self, org_id: str, ctx: AdminContext) -> Organization:
        org = await self._load(org_id)
        if not can_view_organization(ctx, org):
            raise ScopeViolationException("This organization is outside your scope")
        return org

    async def _change_status(
        self,
        org_id: str,
        ctx: AdminContext,
        new_status: OrganizationStatus,
        action: AuditAction,
        reason: str | None,
    ) -> Organization:
        org = await self._load(org_id)
        if not can_manage_organization(ctx, org):
            logger.warning("Admin %s (%s) denied managing organization %s", ctx.user_id, ctx.role, org_id)
            raise ScopeViolationException("You may not manage this organization")
        if org.status == new_status:
            raise BusinessRuleException(f"Organization is already {new_status.value}")

        previous = org.status
        org.status = new_status
        await self.db.flush()

        await self.audit.log_for_context(
            ctx,
            action,
            target_id=org.id,
            target_type=AuditTargetType.ORGANIZATION,
            target_name=org.name,
            metadata={"from": previous.value, "to": new_status.value, "reason": reason},
            **self.audit_options,
        )
        logger.info("Organization %s %s -> %s by %s", org.id, previous.value, new_status.value, ctx.user_id)
        return org

    async def approve_organization(self, org_id: str, ctx: AdminContext, reason: str | None = None) -> Organization:
        return await self._change_status(
            org_id, ctx, OrganizationStatus.ACTIVE, AuditAction.ORGANIZATION_APPROVED, reason
        )

    async def suspend_organization(self, org_id: str, ctx: AdminContext, reason: str | None = None) -> Organization:
        return await self._change_status(
            org_id, ctx, OrganizationStatus.SUSPENDED, AuditAction.ORGANIZATION_SUSPENDED, reason
        )

    async def review_compliance(
        self, org_id: str, ctx: AdminContext, approved: bool, notes: str | None = None
    ) -> Organization:
        """Approve or reject a pending compliance submission.

        ``can_approve_compliance`` alone does not check scope for country and
        regional admins, so the loaded record is also checked for containment.
        """
        org = await self._load(org_id)
        if not (can_approve_compliance(ctx, org.id) and can_view_organization(ctx, org)):
            logger.warning("Admin %s (%s) denied compliance review of %s", ctx.user_id, ctx.role, org_id)
            raise ScopeViolationException("You may not review compliance for this organization")
        if org.compliance_status != ComplianceStatus.PENDING:
            raise BusinessRuleException("No pending compliance submission for this organization")

        org.compliance_status = ComplianceStatus.APPROVED if approved else ComplianceStatus.REJECTED
        await self.db.flush()

        await self.audit.log_for_context(
            ctx,
            AuditAction.COMPLIANCE_APPROVED if approved else AuditAction.COMPLIANCE_REJECTED,
            target_id=org.id,
            target_type=AuditTargetType.COMPLIANCE,
            target_name=org.name,
            metadata={"notes": notes} if notes else None,
            **self.audit_options,
        )
        return org
