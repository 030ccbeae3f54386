"""Pydantic v2 schemas for broadcast messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from netadmin.models.enums import DeliveryChannel, MessageAudience
from netadmin.modules.communications.audience import composition_problems


class AdminMessageCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    audience: MessageAudience
    target_countries: list[str] = []
    target_regions: list[str] = []
    target_organizations: list[str] = []
    target_roles: list[str] = []
    delivery_channels: list[DeliveryChannel] = [DeliveryChannel.IN_APP]
    scheduled_for: datetime | None = None
    send_now: bool = True

    @model_validator(mode="after")
    def _require_targets(self) -> AdminMessageCreate:
        problems = composition_problems(self.audience, self)
        if problems:
            raise ValueError(problems[0])
        return self


class AdminMessageUpdate(BaseModel):
    """Draft edits. Unset fields keep their stored values."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    audience: MessageAudience | None = None
    target_countries: list[str] | None = None
    target_regions: list[str] | None = None
    target_organizations: list[str] | None = None
    target_roles: list[str] | None = None
    delivery_channels: list[DeliveryChannel] | None = None
    scheduled_for: datetime | None = None


class AdminMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    audience: MessageAudience
    target_countries: list[str]
    target_regions: list[str]
    target_organizations: list[str]
    target_roles: list[str]
    delivery_channels: list[str]
    sender_id: str
    sender_name: str
    created_at: datetime
    scheduled_for: datetime | None = None
    sent_at: datetime | None = None
    read_count: int = 0


class InboxMessageResponse(BaseModel):
    id: str
    title: str
    content: str
    audience: MessageAudience
    sender_name: str
    sent_at: datetime | None = None
    is_read: bool
