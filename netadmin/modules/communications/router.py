"""Communications API router: compose broadcasts and read the caller's inbox."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.database.session import get_db
from netadmin.exceptions import ForbiddenException, NotFoundException
from netadmin.models.admin_message import AdminMessage
from netadmin.models.enums import MessageAudience
from netadmin.modules.communications.audience import Recipient, is_read_by, message_targets_recipient
from netadmin.modules.communications.schemas import (
    AdminMessageCreate,
    AdminMessageResponse,
    AdminMessageUpdate,
    InboxMessageResponse,
)
from netadmin.modules.communications.service import AdminMessageService
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.dependencies import get_admin_context, require_admin
from netadmin.modules.governance.roles import is_super_admin

router = APIRouter(prefix="/messages", tags=["communications"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_response(message: AdminMessage) -> AdminMessageResponse:
    return AdminMessageResponse(
        id=message.id,
        title=message.title,
        content=message.content,
        audience=message.audience,
        target_countries=list(message.target_countries or []),
        target_regions=list(message.target_regions or []),
        target_organizations=list(message.target_organizations or []),
        target_roles=list(message.target_roles or []),
        delivery_channels=list(message.delivery_channels or []),
        sender_id=message.sender_id,
        sender_name=message.sender_name,
        created_at=message.created_at,
        scheduled_for=message.scheduled_for,
        sent_at=message.sent_at,
        read_count=len(message.read_by or []),
    )


def _to_inbox(message: AdminMessage, user_id: str) -> InboxMessageResponse:
    return InboxMessageResponse(
        id=message.id,
        title=message.title,
        content=message.content,
        audience=message.audience,
        sender_name=message.sender_name,
        sent_at=message.sent_at,
        is_read=is_read_by(message, user_id),
    )


def _recipient(ctx: AdminContext) -> Recipient:
    return Recipient(ctx.user_id, ctx.role, ctx.country, ctx.region, ctx.organization_id)


def _require_sender_or_super(message: AdminMessage, ctx: AdminContext) -> None:
    if message.sender_id != ctx.user_id and not is_super_admin(ctx.role):
        raise ForbiddenException("Only the sender or a super admin may change this message")


# ---------------------------------------------------------------------------
# Composition (admins)
# ---------------------------------------------------------------------------


@router.post("", response_model=AdminMessageResponse, status_code=201)
async def create_message(
    body: AdminMessageCreate,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Compose a broadcast. Targets must lie inside the sender's scope."""
    svc = AdminMessageService(db)
    return _to_response(await svc.create_message(body, ctx))


@router.get("", response_model=list[AdminMessageResponse])
async def list_messages(
    audience: MessageAudience | None = Query(None),
    sent: bool | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Super admins see every message; other admins see those they composed."""
    sender_id = None if is_super_admin(ctx.role) else ctx.user_id
    svc = AdminMessageService(db)
    messages = await svc.list_messages(audience=audience, sent=sent, sender_id=sender_id, limit=limit)
    return [_to_response(m) for m in messages]


@router.patch("/{message_id}", response_model=AdminMessageResponse)
async def update_message(
    message_id: str,
    body: AdminMessageUpdate,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    svc = AdminMessageService(db)
    _require_sender_or_super(await svc.get_message(message_id), ctx)
    return _to_response(await svc.update_message(message_id, body, ctx))


@router.post("/{message_id}/send", response_model=AdminMessageResponse)
async def send_message(
    message_id: str,
    ctx: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    svc = AdminMessageService(db)
    _require_sender_or_super(await svc.get_message(message_id), ctx)
    return _to_response(await svc.send_message(message_id, ctx))


# ---------------------------------------------------------------------------
# Inbox (any authenticated user)
# ---------------------------------------------------------------------------


@router.get("/inbox", response_model=list[InboxMessageResponse])
async def inbox(
    ctx: AdminContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    svc = AdminMessageService(db)
    messages = await svc.get_messages_for_user(
        ctx.user_id, ctx.role, ctx.country, ctx.region, ctx.organization_id
    )
    return [_to_inbox(m, ctx.user_id) for m in messages]


@router.get("/inbox/unread", response_model=list[InboxMessageResponse])
async def unread_inbox(
    ctx: AdminContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    svc = AdminMessageService(db)
    messages = await svc.get_unread_messages_for_user(
        ctx.user_id, ctx.role, ctx.country, ctx.region, ctx.organization_id
    )
    return [_to_inbox(m, ctx.user_id) for m in messages]


@router.post("/{message_id}/read", status_code=204)
async def mark_read(
    message_id: str,
    ctx: AdminContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    """Mark a received message as read. Messages not addressed to the caller read as missing."""
    svc = AdminMessageService(db)
    message = await svc.get_message(message_id)
    if message.sent_at is None or not message_targets_recipient(message, _recipient(ctx)):
        raise NotFoundException(f"Message {message_id} not found")
    await svc.mark_message_as_read(message_id, ctx.user_id)
