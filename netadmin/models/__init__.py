# Import all models so SQLAlchemy metadata is populated for Alembic autogenerate
from netadmin.models.admin_message import AdminMessage
from netadmin.models.audit_log import AuditLog
from netadmin.models.enums import (
    AdminRole,
    AuditAction,
    AuditTargetType,
    ComplianceStatus,
    DeliveryChannel,
    IncidentPriority,
    IncidentStatus,
    IncidentType,
    MessageAudience,
    OrganizationStatus,
    ScopeType,
    UserRole,
)
from netadmin.models.incident import Incident
from netadmin.models.organization import Organization
