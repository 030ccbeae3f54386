"""Broadcast message service: composition, audience matching, read state.

Lifecycle: draft -> (scheduled) -> sent -> partially read. ``sent_at`` is
only ever set while it is NULL, and ``read_by`` only grows, both through
single conditional UPDATE statements.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import func, not_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.database.filters import (
    AnyOf,
    ArrayContains,
    Equals,
    Range,
    apply_filters,
    apply_ordering,
    to_predicate,
)
from netadmin.exceptions import (
    ImmutableRecordException,
    NotFoundException,
    ScopeViolationException,
    ValidationException,
)
from netadmin.models.admin_message import AdminMessage
from netadmin.models.enums import AdminRole, AuditAction, AuditTargetType, MessageAudience
from netadmin.models.organization import Organization
from netadmin.modules.audit.service import AuditLogService
from netadmin.modules.communications.audience import (
    Recipient,
    audience_targets,
    composition_problems,
    messages_for_recipient,
    unread_messages_for_recipient,
)
from netadmin.modules.communications.schemas import AdminMessageCreate, AdminMessageUpdate
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.permissions import can_send_message
from netadmin.modules.governance.scope import filter_organizations_by_scope

logger = logging.getLogger(__name__)


class AdminMessageService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    async def authorize_targets(self, ctx: AdminContext, audience: MessageAudience, targets: list[str]) -> None:
        """Raise ScopeViolationException unless ``ctx`` may address ``targets``."""
        if can_send_message(ctx, audience, targets):
            return

        # Country and regional admins may address organizations inside their scope
        if (
            audience == MessageAudience.ORGANIZATION
            and targets
            and ctx.role in (AdminRole.COUNTRY_ADMIN, AdminRole.REGIONAL_ADMIN)
        ):
            wanted = set(targets)
            stmt = apply_filters(select(Organization), Organization, [AnyOf("id", tuple(sorted(wanted)))])
            result = await self.db.execute(stmt)
            orgs = list(result.scalars().all())
            visible = filter_organizations_by_scope(orgs, ctx)
            if len(orgs) == len(wanted) and len(visible) == len(orgs):
                return

        logger.warning("Admin %s (%s) may not message %s %s", ctx.user_id, ctx.role, audience.value, targets)
        raise ScopeViolationException(f"You may not send '{audience.value}' messages to these targets")

    async def create_message(self, data: AdminMessageCreate, sender: AdminContext) -> AdminMessage:
        """Create a draft; stamp it sent immediately when ``send_now`` and not scheduled."""
        await self.authorize_targets(sender, data.audience, audience_targets(data.audience, data))

        send_immediately = data.send_now and data.scheduled_for is None
        message = AdminMessage(
            title=data.title,
            content=data.content,
            audience=data.audience,
            target_countries=list(data.target_countries),
            target_regions=list(data.target_regions),
            target_organizations=list(data.target_organizations),
            target_roles=list(data.target_roles),
            delivery_channels=[c.value for c in data.delivery_channels],
            sender_id=sender.user_id,
            sender_name=sender.name or sender.user_id,
            scheduled_for=data.scheduled_for,
            sent_at=datetime.now(UTC) if send_immediately else None,
            read_by=[],
        )
        self.db.add(message)
        await self.db.flush()

        logger.info("Created %s message %s by %s", data.audience.value, message.id, sender.user_id)
        if send_immediately:
            await self._audit_sent(message, sender)
        return message

    async def update_message(self, message_id: str, data: AdminMessageUpdate, ctx: AdminContext) -> AdminMessage:
        """Edit a draft. Sent messages are immutable."""
        message = await self.get_message(message_id)
        if message.sent_at is not None:
            raise ImmutableRecordException(f"Message {message_id} has already been sent")

        changes = data.model_dump(exclude_unset=True)
        if "delivery_channels" in changes and changes["delivery_channels"] is not None:
            changes["delivery_channels"] = [c.value for c in data.delivery_channels]
        for key, value in changes.items():
            if value is not None or key == "scheduled_for":
                setattr(message, key, value)

        problems = composition_problems(message.audience, message)
        if problems:
            details = [{"message": problem} for problem in problems]
            raise ValidationException("Edited message cannot reach any recipient", details=details)

        await self.authorize_targets(ctx, message.audience, audience_targets(message.audience, message))
        await self.db.flush()
        return message

    async def send_message(self, message_id: str, ctx: AdminContext | None = None) -> AdminMessage:
        """Mark a message sent. Already-sent messages keep their original ``sent_at``."""
        result = await self.db.execute(
            update(AdminMessage)
            .where(AdminMessage.id == message_id, AdminMessage.sent_at.is_(None))
            .values(sent_at=datetime.now(UTC))
            .returning(AdminMessage.id)
        )
        stamped = result.scalar_one_or_none() is not None

        message = await self.get_message(message_id)
        if stamped:
            await self.db.refresh(message, ["sent_at"])
            logger.info("Sent message %s", message_id)
            if ctx is not None:
                await self._audit_sent(message, ctx)
        return message

    async def _audit_sent(self, message: AdminMessage, ctx: AdminContext) -> None:
        await AuditLogService(self.db).log_for_context(
            ctx,
            AuditAction.MESSAGE_SENT,
            target_id=message.id,
            target_type=AuditTargetType.MESSAGE,
            target_name=message.title,
            metadata={"audience": message.audience.value, "channels": list(message.delivery_channels)},
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_message(self, message_id: str) -> AdminMessage:
        result = await self.db.execute(select(AdminMessage).where(AdminMessage.id == message_id))
        message = result.scalar_one_or_none()
        if message is None:
            raise NotFoundException(f"Message {message_id} not found")
        return message

    async def list_messages(
        self,
        audience: MessageAudience | None = None,
        sent: bool | None = None,
        sender_id: str | None = None,
        limit: int | None = None,
    ) -> list[AdminMessage]:
        """Messages newest first by creation time."""
        filters = []
        if audience is not None:
            filters.append(Equals("audience", audience))
        if sender_id is not None:
            filters.append(Equals("sender_id", sender_id))
        if sent is False:
            filters.append(Equals("sent_at", None))

        stmt = apply_filters(select(AdminMessage), AdminMessage, filters)
        if sent is True:
            stmt = stmt.where(AdminMessage.sent_at.isnot(None))
        stmt = apply_ordering(stmt, AdminMessage, "created_at", descending=True)
        if limit:
            stmt = stmt.limit(limit)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_messages_for_user(
        self,
        user_id: str,
        role: str,
        country: str | None = None,
        region: str | None = None,
        organization_id: str | None = None,
    ) -> list[AdminMessage]:
        """Sent messages whose audience includes the given user."""
        recipient = Recipient(user_id, role, country, region, organization_id)
        return messages_for_recipient(await self.list_messages(sent=True), recipient)

    async def get_unread_messages_for_user(
        self,
        user_id: str,
        role: str,
        country: str | None = None,
        region: str | None = None,
        organization_id: str | None = None,
    ) -> list[AdminMessage]:
        recipient = Recipient(user_id, role, country, region, organization_id)
        return unread_messages_for_recipient(await self.list_messages(sent=True), recipient)

    async def get_pending_scheduled_messages(self, now: datetime | None = None) -> list[AdminMessage]:
        """Unsent messages whose schedule has come due, earliest first."""
        filters = [
            Equals("sent_at", None),
            Range("scheduled_for", lte=now or datetime.now(UTC)),
        ]
        stmt = apply_filters(select(AdminMessage), AdminMessage, filters)
        stmt = apply_ordering(stmt, AdminMessage, "scheduled_for", descending=False)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Read state
    # ------------------------------------------------------------------

    async def mark_message_as_read(self, message_id: str, user_id: str) -> None:
        """Add ``user_id`` to ``read_by`` once; repeated calls are no-ops."""
        result = await self.db.execute(
            update(AdminMessage)
            .where(
                AdminMessage.id == message_id,
                not_(to_predicate(AdminMessage, ArrayContains("read_by", user_id))),
            )
            .values(read_by=func.array_append(AdminMessage.read_by, user_id))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            # Either already read or missing; only the latter is an error
            await self.get_message(message_id)
