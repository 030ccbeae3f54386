"""Pydantic schemas for the caller's governance context."""

from pydantic import BaseModel

from netadmin.models.enums import ScopeType


class ScopeResponse(BaseModel):
    type: ScopeType
    value: str | None = None


class CapabilitiesResponse(BaseModel):
    manage_admin_roles: bool
    send_network_wide_message: bool
    view_audit_logs: bool
    view_incidents: bool


class AdminContextResponse(BaseModel):
    user_id: str
    role: str
    country: str | None = None
    region: str | None = None
    organization_id: str | None = None
    scope: ScopeResponse
    capabilities: CapabilitiesResponse
