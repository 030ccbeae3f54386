"""Scoped permission predicates for the four-tier admin hierarchy.

Every function here is pure and never raises. Missing or malformed scope data
resolves to ``False`` except in ``can_approve_compliance`` and
``can_view_incidents``, whose country/regional branches are known to skip the
scope check (see the notes on each).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from netadmin.models.enums import AdminRole, MessageAudience
from netadmin.modules.governance.context import AdminContext, read_field
from netadmin.modules.governance.roles import is_super_admin


def _same(scope_value: Any, target_value: Any) -> bool:
    return bool(scope_value) and bool(target_value) and scope_value == target_value


def can_view_organization(ctx: AdminContext, org: Any) -> bool:
    if is_super_admin(ctx.role):
        return True

    if ctx.role == AdminRole.COUNTRY_ADMIN:
        return _same(ctx.country, read_field(org, "country"))

    if ctx.role == AdminRole.REGIONAL_ADMIN:
        return _same(ctx.region, read_field(org, "region"))

    if ctx.role == AdminRole.ORGANIZATION_ADMIN:
        return _same(ctx.organization_id, read_field(org, "id"))

    return False


def can_manage_organization(ctx: AdminContext, org: Any) -> bool:
    """Approve/suspend rights. Organization admins may view their own record but never manage it."""
    if is_super_admin(ctx.role):
        return True

    if ctx.role == AdminRole.COUNTRY_ADMIN:
        return _same(ctx.country, read_field(org, "country"))

    if ctx.role == AdminRole.REGIONAL_ADMIN:
        return _same(ctx.region, read_field(org, "region"))

    return False


def can_approve_compliance(ctx: AdminContext, org_id: str | None) -> bool:
    """Known limitation: country and regional admins pass without checking that
    ``org_id`` lies in their scope, since only the id is available here.
    Callers holding the organization record must also require
    ``can_view_organization``.
    """
    if is_super_admin(ctx.role):
        return True

    if ctx.role in (AdminRole.COUNTRY_ADMIN, AdminRole.REGIONAL_ADMIN):
        return True

    return False


def can_view_incidents(ctx: AdminContext, incident: Any = None) -> bool:
    """Known limitation: country and regional admins pass without a scope
    check. Incident listings narrow them with the incident scope filters.
    """
    if is_super_admin(ctx.role):
        return True

    if ctx.role in (AdminRole.COUNTRY_ADMIN, AdminRole.REGIONAL_ADMIN):
        return True

    if ctx.role == AdminRole.ORGANIZATION_ADMIN and incident is not None:
        return _same(ctx.organization_id, read_field(incident, "organization_id"))

    return False


def can_manage_admin_roles(ctx: AdminContext) -> bool:
    return is_super_admin(ctx.role)


def can_send_network_wide_message(ctx: AdminContext) -> bool:
    return is_super_admin(ctx.role)


def can_view_audit_logs(ctx: AdminContext) -> bool:
    return is_super_admin(ctx.role) or ctx.role == AdminRole.COUNTRY_ADMIN


def can_send_message(ctx: AdminContext, audience: str, targets: Sequence[str] = ()) -> bool:
    """Whether ``ctx`` may broadcast to ``audience`` restricted to ``targets``.

    ``targets`` are the country names, region names or organization ids that
    match the audience. Organization targets chosen by country or regional
    admins are not decided here; the service checks them against the loaded
    organization records.
    """
    if is_super_admin(ctx.role):
        return True

    if audience in (MessageAudience.NETWORK_WIDE, MessageAudience.ROLE_SPECIFIC):
        return can_send_network_wide_message(ctx)

    if not targets:
        return False

    if audience == MessageAudience.COUNTRY:
        return ctx.role == AdminRole.COUNTRY_ADMIN and all(_same(ctx.country, t) for t in targets)

    if audience == MessageAudience.REGION:
        return ctx.role == AdminRole.REGIONAL_ADMIN and all(_same(ctx.region, t) for t in targets)

    if audience == MessageAudience.ORGANIZATION:
        return ctx.role == AdminRole.ORGANIZATION_ADMIN and all(
            _same(ctx.organization_id, t) for t in targets
        )

    return False
