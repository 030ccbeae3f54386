"""Governance module: admin hierarchy, scoped permissions and query scopes."""

from netadmin.modules.governance.auth import AuthenticatedUser, get_current_user
from netadmin.modules.governance.context import AdminContext, IncidentRef, OrganizationRef, resolve_admin_context
from netadmin.modules.governance.dependencies import get_admin_context, require_admin, require_capability
from netadmin.modules.governance.permissions import (
    can_approve_compliance,
    can_manage_admin_roles,
    can_manage_organization,
    can_send_message,
    can_send_network_wide_message,
    can_view_audit_logs,
    can_view_incidents,
    can_view_organization,
)
from netadmin.modules.governance.roles import (
    is_admin,
    is_country_admin,
    is_organization_admin,
    is_regional_admin,
    is_super_admin,
)
from netadmin.modules.governance.scope import AdminScope, filter_organizations_by_scope, get_admin_scope, scope_filters

__all__ = [
    # Context
    "AdminContext",
    "OrganizationRef",
    "IncidentRef",
    "resolve_admin_context",
    # Auth
    "AuthenticatedUser",
    "get_current_user",
    # Dependencies
    "get_admin_context",
    "require_admin",
    "require_capability",
    # Roles
    "is_admin",
    "is_super_admin",
    "is_country_admin",
    "is_regional_admin",
    "is_organization_admin",
    # Permissions
    "can_view_organization",
    "can_manage_organization",
    "can_approve_compliance",
    "can_view_incidents",
    "can_manage_admin_roles",
    "can_send_network_wide_message",
    "can_view_audit_logs",
    "can_send_message",
    # Scope
    "AdminScope",
    "get_admin_scope",
    "filter_organizations_by_scope",
    "scope_filters",
]
