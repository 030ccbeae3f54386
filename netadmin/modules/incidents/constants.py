"""Incident reporting constants."""

from netadmin.models.enums import IncidentPriority, IncidentStatus

OPEN_STATUSES: tuple[IncidentStatus, ...] = (IncidentStatus.OPEN, IncidentStatus.UNDER_REVIEW)

TERMINAL_STATUSES: tuple[IncidentStatus, ...] = (IncidentStatus.RESOLVED, IncidentStatus.CLOSED)

HIGH_PRIORITIES: tuple[IncidentPriority, ...] = (IncidentPriority.HIGH, IncidentPriority.CRITICAL)
