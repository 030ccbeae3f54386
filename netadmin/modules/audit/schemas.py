"""Pydantic v2 schemas for the audit log API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from netadmin.models.enums import AuditAction, AuditTargetType


class AuditLogQuery(BaseModel):
    """Equality and timestamp-range filters, combined with AND."""

    user_id: str | None = None
    action: AuditAction | None = None
    target_id: str | None = None
    target_type: AuditTargetType | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    limit: int | None = Field(None, ge=1)

    @field_validator("start_date", "end_date")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Naive bounds are read as UTC so they compare with offset-aware ones
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @model_validator(mode="after")
    def _check_range(self) -> AuditLogQuery:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    user_name: str
    user_role: str
    action: AuditAction
    target_id: str | None = None
    target_type: AuditTargetType | None = None
    target_name: str | None = None
    metadata: dict[str, Any] | None = Field(None, validation_alias="details")
    ip_address: str | None = None
    user_agent: str | None = None
    timestamp: datetime
