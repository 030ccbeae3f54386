"""Audit recorder: append-only log of privileged actions.

Entries are inserted once and never updated or deleted; this service exposes
no mutation besides ``log_action``. Timestamps are assigned by the database
at insert time.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.config import settings
from netadmin.database.filters import AnyOf, Equals, QueryFilter, Range, apply_filters, apply_ordering
from netadmin.models.audit_log import AuditLog
from netadmin.models.enums import AuditAction, AuditTargetType
from netadmin.modules.audit.constants import (
    CRITICAL_ACTIONS,
    CRITICAL_LOG_LIMIT,
    ORGANIZATION_LOG_LIMIT,
    RECENT_LOG_LIMIT,
    USER_LOG_LIMIT,
)
from netadmin.modules.audit.schemas import AuditLogQuery
from netadmin.modules.governance.context import AdminContext

logger = logging.getLogger(__name__)


def build_audit_filters(query: AuditLogQuery) -> list[QueryFilter]:
    filters: list[QueryFilter] = []
    if query.user_id:
        filters.append(Equals("user_id", query.user_id))
    if query.action:
        filters.append(Equals("action", query.action))
    if query.target_id:
        filters.append(Equals("target_id", query.target_id))
    if query.target_type:
        filters.append(Equals("target_type", query.target_type))
    if query.start_date or query.end_date:
        filters.append(Range("timestamp", gte=query.start_date, lte=query.end_date))
    return filters


class AuditLogService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def log_action(
        self,
        user_id: str,
        user_name: str,
        user_role: str,
        action: AuditAction,
        *,
        target_id: str | None = None,
        target_type: AuditTargetType | None = None,
        target_name: str | None = None,
        metadata: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuditLog:
        """Append one immutable audit entry."""
        entry = AuditLog(
            user_id=user_id,
            user_name=user_name,
            user_role=user_role,
            action=action,
            target_id=target_id,
            target_type=target_type,
            target_name=target_name,
            details=metadata,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.db.add(entry)
        await self.db.flush()

        logger.info(
            "Audit %s by %s (%s) on %s %s",
            action.value if isinstance(action, AuditAction) else action,
            user_id,
            user_role,
            target_type.value if isinstance(target_type, AuditTargetType) else target_type,
            target_id,
        )
        return entry

    async def log_for_context(self, ctx: AdminContext, action: AuditAction, **options: Any) -> AuditLog:
        """``log_action`` with the actor taken from an admin context."""
        return await self.log_action(ctx.user_id, ctx.name or ctx.user_id, ctx.role, action, **options)

    # ------------------------------------------------------------------
    # Queries (read-only)
    # ------------------------------------------------------------------

    async def _query(self, filters: list[QueryFilter], limit: int | None) -> list[AuditLog]:
        stmt = apply_filters(select(AuditLog), AuditLog, filters)
        stmt = apply_ordering(stmt, AuditLog, "timestamp", descending=True)
        if limit is not None:
            stmt = stmt.limit(min(limit, settings.audit_log_max_limit))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_audit_logs(self, query: AuditLogQuery | None = None) -> list[AuditLog]:
        """Filtered audit entries, newest first."""
        query = query or AuditLogQuery()
        return await self._query(build_audit_filters(query), query.limit)

    async def get_organization_audit_logs(
        self, organization_id: str, limit: int = ORGANIZATION_LOG_LIMIT
    ) -> list[AuditLog]:
        filters = [
            Equals("target_type", AuditTargetType.ORGANIZATION),
            Equals("target_id", organization_id),
        ]
        return await self._query(filters, limit)

    async def get_user_audit_logs(self, user_id: str, limit: int = USER_LOG_LIMIT) -> list[AuditLog]:
        return await self._query([Equals("user_id", user_id)], limit)

    async def get_recent_audit_logs(self, limit: int = RECENT_LOG_LIMIT) -> list[AuditLog]:
        return await self._query([], limit)

    async def get_critical_audit_logs(self, limit: int = CRITICAL_LOG_LIMIT) -> list[AuditLog]:
        """Security-relevant entries: role changes, suspensions, settings changes."""
        actions = tuple(sorted(CRITICAL_ACTIONS, key=lambda a: a.value))
        return await self._query([AnyOf("action", actions)], limit)


def client_info(request: Any) -> dict[str, str | None]:
    """``ip_address``/``user_agent`` options for ``log_action`` taken from a request."""
    client = getattr(request, "client", None)
    return {
        "ip_address": client.host if client else None,
        "user_agent": request.headers.get("user-agent"),
    }
