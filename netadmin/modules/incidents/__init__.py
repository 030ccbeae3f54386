"""Incidents module: scoped incident reporting and triage."""
