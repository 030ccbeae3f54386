"""Celery tasks for scheduled broadcast dispatch.

The beat schedule polls for scheduled messages that have come due and marks
them sent, auditing each send under a system actor. Channel fan-out (email,
SMS) is handled by the delivery workers and is not part of this task;
failures are logged and counted, not retried.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

from celery_app import celery
from netadmin.database.engine import async_session
from netadmin.modules.governance.context import AdminContext

logger = logging.getLogger(__name__)

# Actor recorded on the message_sent audit entry of scheduled sends
DISPATCH_ACTOR = AdminContext(user_id="system", role="system", name="Scheduled dispatch")


async def _dispatch_scheduled_messages_async() -> dict:
    """Stamp ``sent_at`` on every pending scheduled message, earliest first."""
    from netadmin.modules.communications.service import AdminMessageService

    stats = {"checked": 0, "sent": 0, "errors": 0}

    async with async_session() as session:
        svc = AdminMessageService(session)
        pending = await svc.get_pending_scheduled_messages(datetime.now(UTC))
        stats["checked"] = len(pending)

        for message in pending:
            try:
                async with session.begin_nested():
                    await svc.send_message(message.id, DISPATCH_ACTOR)
                stats["sent"] += 1
            except Exception:
                logger.exception("Error dispatching scheduled message %s", message.id)
                stats["errors"] += 1

        await session.commit()

    return stats


@celery.task(name="netadmin.modules.communications.tasks.dispatch_scheduled_messages")
def dispatch_scheduled_messages():
    """Periodic: mark due scheduled broadcasts as sent."""
    stats = asyncio.run(_dispatch_scheduled_messages_async())
    logger.info("dispatch_scheduled_messages: %s", stats)
    return stats
