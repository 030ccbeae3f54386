"""Admin context and the minimal record shapes the evaluator reasons about."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AdminContext:
    """Normalized caller identity and scope, built per request and discarded.

    The scope field matching the role (``country`` for a country admin, and so
    on) may be absent; that means "no authorized scope", not an error.
    """

    user_id: str
    role: str
    country: str | None = None
    region: str | None = None
    organization_id: str | None = None
    managed_countries: tuple[str, ...] = ()
    managed_regions: tuple[str, ...] = ()
    managed_organizations: tuple[str, ...] = ()
    name: str = ""


@dataclass(frozen=True)
class OrganizationRef:
    id: str
    country: str | None = None
    region: str | None = None


@dataclass(frozen=True)
class IncidentRef:
    organization_id: str | None = None


def read_field(record: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute holder, ``None`` if missing."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _clean(value: Any) -> str | None:
    if isinstance(value, enum.Enum):
        value = value.value
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _clean_list(values: Iterable[Any] | None) -> tuple[str, ...]:
    if not values or isinstance(values, str):
        return ()
    return tuple(v for v in (_clean(item) for item in values) if v)


def resolve_admin_context(profile: Any) -> AdminContext:
    """Build an ``AdminContext`` from a caller profile.

    ``profile`` is a mapping or an object such as ``AuthenticatedUser``. Blank
    scope fields are normalized to ``None`` so every downstream check treats
    them as absent. Roles are lower-cased; unknown roles pass through and then
    fail every admin predicate.
    """
    user_id = _clean(read_field(profile, "user_id")) or _clean(read_field(profile, "id")) or ""
    role = (_clean(read_field(profile, "role")) or "").lower()

    return AdminContext(
        user_id=user_id,
        role=role,
        country=_clean(read_field(profile, "country")),
        region=_clean(read_field(profile, "region")),
        organization_id=_clean(read_field(profile, "organization_id")),
        managed_countries=_clean_list(read_field(profile, "managed_countries")),
        managed_regions=_clean_list(read_field(profile, "managed_regions")),
        managed_organizations=_clean_list(read_field(profile, "managed_organizations")),
        name=_clean(read_field(profile, "name")) or "",
    )
