"""Incident reporting: scoped listing, triage and append-only notes."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, select, type_coerce, update
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.database.filters import Equals, apply_filters, apply_ordering
from netadmin.exceptions import NotFoundException, ScopeViolationException
from netadmin.models.enums import (
    AdminRole,
    AuditAction,
    AuditTargetType,
    IncidentPriority,
    IncidentStatus,
)
from netadmin.models.incident import Incident
from netadmin.models.organization import Organization
from netadmin.modules.audit.service import AuditLogService
from netadmin.modules.governance.context import AdminContext, OrganizationRef
from netadmin.modules.governance.permissions import can_view_incidents, can_view_organization
from netadmin.modules.governance.roles import is_regional_admin
from netadmin.modules.governance.scope import INCIDENT_SCOPE_FIELDS, get_admin_scope, scope_filters
from netadmin.modules.incidents.constants import HIGH_PRIORITIES, OPEN_STATUSES, TERMINAL_STATUSES
from netadmin.modules.incidents.schemas import IncidentCreate

logger = logging.getLogger(__name__)


def incident_in_scope(ctx: AdminContext, incident: Incident) -> bool:
    """``can_view_incidents`` plus containment for country and regional admins.

    The incident's denormalized country/region stand in for its organization.
    """
    if not can_view_incidents(ctx, incident):
        return False
    if ctx.role in (AdminRole.COUNTRY_ADMIN, AdminRole.REGIONAL_ADMIN):
        org = OrganizationRef(
            id=incident.organization_id or "",
            country=incident.organization_country,
            region=incident.organization_region,
        )
        return can_view_organization(ctx, org)
    return True


class IncidentService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditLogService(db)

    async def create_incident(self, data: IncidentCreate, ctx: AdminContext) -> Incident:
        country = region = None
        if data.organization_id:
            result = await self.db.execute(
                select(Organization).where(Organization.id == data.organization_id)
            )
            org = result.scalar_one_or_none()
            if org is None:
                raise NotFoundException(f"Organization {data.organization_id} not found")
            country, region = org.country, org.region

        incident = Incident(
            organization_id=data.organization_id,
            organization_country=country,
            organization_region=region,
            title=data.title,
            description=data.description,
            type=data.type,
            priority=data.priority,
            status=IncidentStatus.OPEN,
            minors_involved=data.minors_involved,
            reported_by=ctx.user_id,
            notes=[],
        )
        self.db.add(incident)
        await self.db.flush()

        await self.audit.log_for_context(
            ctx,
            AuditAction.INCIDENT_CREATED,
            target_id=incident.id,
            target_type=AuditTargetType.INCIDENT,
            target_name=incident.title,
            metadata={"priority": data.priority.value, "minors_involved": data.minors_involved},
        )
        logger.info("Incident %s reported by %s", incident.id, ctx.user_id)
        return incident

    async def _load(self, incident_id: str) -> Incident:
        result = await self.db.execute(select(Incident).where(Incident.id == incident_id))
        incident = result.scalar_one_or_none()
        if incident is None:
            raise NotFoundException(f"Incident {incident_id} not found")
        return incident

    async def get_incident(self, incident_id: str, ctx: AdminContext) -> Incident:
        incident = await self._load(incident_id)
        if not incident_in_scope(ctx, incident):
            raise ScopeViolationException("This incident is outside your scope")
        return incident

    async def _get_for_triage(self, incident_id: str, ctx: AdminContext) -> Incident:
        """Assignment, status and priority changes need regional rights or above."""
        incident = await self.get_incident(incident_id, ctx)
        if not is_regional_admin(ctx.role):
            raise ScopeViolationException("Incident triage requires regional admin rights or above")
        return incident

    async def list_incidents(
        self,
        ctx: AdminContext,
        status: IncidentStatus | None = None,
        priority: IncidentPriority | None = None,
        minors_involved: bool | None = None,
    ) -> list[Incident]:
        """Incidents inside the caller's scope, newest first."""
        filters = scope_filters(get_admin_scope(ctx), INCIDENT_SCOPE_FIELDS)
        if filters is None:
            return []
        if status is not None:
            filters.append(Equals("status", status))
        if priority is not None:
            filters.append(Equals("priority", priority))
        if minors_involved is not None:
            filters.append(Equals("minors_involved", minors_involved))

        stmt = apply_filters(select(Incident), Incident, filters)
        stmt = apply_ordering(stmt, Incident, "created_at", descending=True)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def assign_incident(
        self, incident_id: str, assigned_to: str, assigned_to_name: str, ctx: AdminContext
    ) -> Incident:
        incident = await self._get_for_triage(incident_id, ctx)
        incident.assigned_to = assigned_to
        incident.assigned_to_name = assigned_to_name
        incident.status = IncidentStatus.UNDER_REVIEW
        incident.resolved_at = None
        await self.db.flush()

        await self.audit.log_for_context(
            ctx,
            AuditAction.INCIDENT_ASSIGNED,
            target_id=incident.id,
            target_type=AuditTargetType.INCIDENT,
            target_name=incident.title,
            metadata={"assigned_to": assigned_to},
        )
        return incident

    async def update_incident_status(
        self, incident_id: str, status: IncidentStatus, ctx: AdminContext
    ) -> Incident:
        incident = await self._get_for_triage(incident_id, ctx)
        previous = incident.status
        incident.status = status
        if status in TERMINAL_STATUSES:
            incident.resolved_at = datetime.now(UTC)
        else:
            incident.resolved_at = None
        await self.db.flush()

        await self.audit.log_for_context(
            ctx,
            AuditAction.INCIDENT_STATUS_CHANGED,
            target_id=incident.id,
            target_type=AuditTargetType.INCIDENT,
            target_name=incident.title,
            metadata={"from": previous.value, "to": status.value},
        )
        return incident

    async def update_incident_priority(
        self, incident_id: str, priority: IncidentPriority, ctx: AdminContext
    ) -> Incident:
        incident = await self._get_for_triage(incident_id, ctx)
        incident.priority = priority
        await self.db.flush()
        return incident

    async def add_incident_note(self, incident_id: str, content: str, ctx: AdminContext) -> dict[str, Any]:
        """Append a note in one UPDATE (``notes || [note]``).

        The append never rewrites the existing list, so concurrent notes on
        the same incident cannot overwrite each other.
        """
        await self.get_incident(incident_id, ctx)

        note = {
            "id": str(uuid.uuid4()),
            "author_id": ctx.user_id,
            "author_name": ctx.name or ctx.user_id,
            "content": content,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        result = await self.db.execute(
            update(Incident)
            .where(Incident.id == incident_id)
            .values(
                notes=Incident.notes.op("||")(type_coerce([note], JSONB)),
                updated_at=func.now(),
            )
            .returning(Incident.id)
            .execution_options(synchronize_session=False)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundException(f"Incident {incident_id} not found")

        await self.audit.log_for_context(
            ctx,
            AuditAction.INCIDENT_NOTE_ADDED,
            target_id=incident_id,
            target_type=AuditTargetType.INCIDENT,
        )
        return note

    async def get_organization_incident_stats(self, organization_id: str) -> dict[str, int]:
        result = await self.db.execute(
            select(
                func.count(),
                func.count().filter(Incident.status.in_(OPEN_STATUSES)),
                func.count().filter(Incident.priority.in_(HIGH_PRIORITIES)),
                func.count().filter(Incident.minors_involved.is_(True)),
            ).where(Incident.organization_id == organization_id)
        )
        total, open_count, high_priority, with_minors = result.one()
        return {
            "total": total,
            "open": open_count,
            "high_priority": high_priority,
            "with_minors": with_minors,
        }
