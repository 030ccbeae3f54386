"""Audience matching for broadcast messages.

A message reaches a recipient when the recipient carries the attribute its
audience targets and that attribute is listed on the message. Recipients
lacking the attribute never match, so an organization-wide message never
reaches a user without an organization.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from netadmin.models.enums import MessageAudience
from netadmin.modules.governance.context import read_field

T = TypeVar("T")


@dataclass(frozen=True)
class Recipient:
    user_id: str
    role: str
    country: str | None = None
    region: str | None = None
    organization_id: str | None = None


def _listed(value: str | None, targets: Any) -> bool:
    return bool(value) and value in (targets or ())


def message_targets_recipient(message: Any, recipient: Recipient) -> bool:
    audience = read_field(message, "audience")

    if audience == MessageAudience.NETWORK_WIDE:
        return True
    if audience == MessageAudience.COUNTRY:
        return _listed(recipient.country, read_field(message, "target_countries"))
    if audience == MessageAudience.REGION:
        return _listed(recipient.region, read_field(message, "target_regions"))
    if audience == MessageAudience.ORGANIZATION:
        return _listed(recipient.organization_id, read_field(message, "target_organizations"))
    if audience == MessageAudience.ROLE_SPECIFIC:
        return _listed(recipient.role, read_field(message, "target_roles"))
    return False


def is_read_by(message: Any, user_id: str) -> bool:
    return user_id in (read_field(message, "read_by") or ())


def messages_for_recipient(messages: Iterable[T], recipient: Recipient) -> list[T]:
    return [m for m in messages if message_targets_recipient(m, recipient)]


def unread_messages_for_recipient(messages: Iterable[T], recipient: Recipient) -> list[T]:
    return [
        m
        for m in messages
        if message_targets_recipient(m, recipient) and not is_read_by(m, recipient.user_id)
    ]


def audience_targets(audience: MessageAudience, message: Any) -> list[str]:
    """The target list that ``audience`` reads, empty for network-wide messages."""
    field = {
        MessageAudience.COUNTRY: "target_countries",
        MessageAudience.REGION: "target_regions",
        MessageAudience.ORGANIZATION: "target_organizations",
        MessageAudience.ROLE_SPECIFIC: "target_roles",
    }.get(audience)
    if field is None:
        return []
    return list(read_field(message, field) or [])


def composition_problems(audience: MessageAudience, message: Any) -> list[str]:
    """Reasons a composed message could reach nobody; empty when it is deliverable."""
    problems = []
    if audience != MessageAudience.NETWORK_WIDE and not audience_targets(audience, message):
        label = audience.value if isinstance(audience, MessageAudience) else audience
        problems.append(f"audience '{label}' requires at least one target")
    if not read_field(message, "delivery_channels"):
        problems.append("at least one delivery channel is required")
    return problems
