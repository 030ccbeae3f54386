"""Audit recorder constants."""

from netadmin.models.enums import AuditAction

# Security-relevant actions surfaced on the critical audit feed
CRITICAL_ACTIONS: frozenset[AuditAction] = frozenset(
    {
        AuditAction.ADMIN_ROLE_CHANGED,
        AuditAction.ORGANIZATION_SUSPENDED,
        AuditAction.USER_SUSPENDED,
        AuditAction.SETTINGS_CHANGED,
    }
)

ORGANIZATION_LOG_LIMIT = 50
USER_LOG_LIMIT = 50
RECENT_LOG_LIMIT = 100
CRITICAL_LOG_LIMIT = 50
