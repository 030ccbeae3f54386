"""Audit module: append-only recorder of privileged actions."""
