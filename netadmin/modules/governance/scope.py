"""Query scope derivation and scope-based filtering of organization records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar

from netadmin.database.filters import Equals, QueryFilter
from netadmin.models.enums import AdminRole, ScopeType
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.governance.permissions import can_view_organization
from netadmin.modules.governance.roles import is_super_admin

T = TypeVar("T")

# Column holding each scope dimension, per collection
ORGANIZATION_SCOPE_FIELDS: Mapping[ScopeType, str] = {
    ScopeType.COUNTRY: "country",
    ScopeType.REGION: "region",
    ScopeType.ORGANIZATION: "id",
}

INCIDENT_SCOPE_FIELDS: Mapping[ScopeType, str] = {
    ScopeType.COUNTRY: "organization_country",
    ScopeType.REGION: "organization_region",
    ScopeType.ORGANIZATION: "organization_id",
}


@dataclass(frozen=True)
class AdminScope:
    type: ScopeType
    value: str | None = None

    @property
    def is_global(self) -> bool:
        return self.type == ScopeType.GLOBAL

    @property
    def authorizes_nothing(self) -> bool:
        return not self.is_global and not self.value


def get_admin_scope(ctx: AdminContext) -> AdminScope:
    """Pick the single scope dimension matching the role.

    A super admin is global whatever else is populated. When the field
    matching the role is absent the most restrictive scope is returned:
    organization type with no value.
    """
    if is_super_admin(ctx.role):
        return AdminScope(type=ScopeType.GLOBAL)

    if ctx.role == AdminRole.COUNTRY_ADMIN and ctx.country:
        return AdminScope(type=ScopeType.COUNTRY, value=ctx.country)

    if ctx.role == AdminRole.REGIONAL_ADMIN and ctx.region:
        return AdminScope(type=ScopeType.REGION, value=ctx.region)

    if ctx.role == AdminRole.ORGANIZATION_ADMIN and ctx.organization_id:
        return AdminScope(type=ScopeType.ORGANIZATION, value=ctx.organization_id)

    return AdminScope(type=ScopeType.ORGANIZATION)


def filter_organizations_by_scope(organizations: Iterable[T], ctx: AdminContext) -> list[T]:
    """Keep the organizations ``ctx`` may view, preserving order."""
    return [org for org in organizations if can_view_organization(ctx, org)]


def scope_filters(
    scope: AdminScope,
    fields: Mapping[ScopeType, str] = ORGANIZATION_SCOPE_FIELDS,
) -> list[QueryFilter] | None:
    """Translate a scope into storage filters.

    Returns an empty list for the global scope and ``None`` when the scope
    authorizes no rows at all; callers must then skip the query and return an
    empty result.
    """
    if scope.is_global:
        return []
    if scope.authorizes_nothing:
        return None
    return [Equals(fields[scope.type], scope.value)]

