import enum

from sqlalchemy import Enum


class AdminRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    COUNTRY_ADMIN = "country_admin"
    REGIONAL_ADMIN = "regional_admin"
    ORGANIZATION_ADMIN = "organization_admin"
    # Legacy alias kept by older profiles, equivalent to SUPER_ADMIN
    ADMIN = "admin"


class UserRole(str, enum.Enum):
    STUDENT = "student"
    MENTOR = "mentor"
    ORGANIZATION = "organization"
    SPONSOR = "sponsor"


class ScopeType(str, enum.Enum):
    GLOBAL = "global"
    COUNTRY = "country"
    REGION = "region"
    ORGANIZATION = "organization"


class MessageAudience(str, enum.Enum):
    NETWORK_WIDE = "network_wide"
    COUNTRY = "country"
    REGION = "region"
    ORGANIZATION = "organization"
    ROLE_SPECIFIC = "role_specific"


class DeliveryChannel(str, enum.Enum):
    IN_APP = "in_app"
    EMAIL = "email"
    SMS = "sms"


class AuditAction(str, enum.Enum):
    ORGANIZATION_APPROVED = "organization_approved"
    ORGANIZATION_SUSPENDED = "organization_suspended"
    ORGANIZATION_UPDATED = "organization_updated"
    COMPLIANCE_APPROVED = "compliance_approved"
    COMPLIANCE_REJECTED = "compliance_rejected"
    INCIDENT_CREATED = "incident_created"
    INCIDENT_ASSIGNED = "incident_assigned"
    INCIDENT_STATUS_CHANGED = "incident_status_changed"
    INCIDENT_NOTE_ADDED = "incident_note_added"
    MESSAGE_SENT = "message_sent"
    ADMIN_ROLE_CHANGED = "admin_role_changed"
    USER_SUSPENDED = "user_suspended"
    SETTINGS_CHANGED = "settings_changed"
    DATA_EXPORTED = "data_exported"


class AuditTargetType(str, enum.Enum):
    ORGANIZATION = "organization"
    EVENT = "event"
    SESSION = "session"
    USER = "user"
    COMPLIANCE = "compliance"
    INCIDENT = "incident"
    MESSAGE = "message"


class OrganizationStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class ComplianceStatus(str, enum.Enum):
    NOT_SUBMITTED = "not_submitted"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class IncidentType(str, enum.Enum):
    SAFETY = "safety"
    MISCONDUCT = "misconduct"
    HARASSMENT = "harassment"
    INJURY = "injury"
    DATA_BREACH = "data_breach"
    OTHER = "other"


class IncidentPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentStatus(str, enum.Enum):
    OPEN = "open"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"
    CLOSED = "closed"


def value_enum(enum_cls: type[enum.Enum]) -> Enum:
    """Column type persisting enum *values* (lowercase) rather than member names."""
    return Enum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=50,
    )
