"""Admin role hierarchy.

Roles form a total order of privilege::

    super_admin > country_admin > regional_admin > organization_admin

Each ``is_*`` predicate answers "at least as privileged as", so a super admin
satisfies all four. ``admin`` is a legacy alias for ``super_admin``. Roles may
be passed as ``AdminRole`` members or plain strings.
"""

import enum

from netadmin.models.enums import AdminRole

ADMIN_ROLES = frozenset(role.value for role in AdminRole)

SUPER_ADMIN_ROLES = frozenset({AdminRole.SUPER_ADMIN.value, AdminRole.ADMIN.value})


def _value(role) -> str | None:
    # Enum members hash by name, so compare plain values against the sets
    return role.value if isinstance(role, enum.Enum) else role


def is_admin(role: str | None) -> bool:
    return _value(role) in ADMIN_ROLES


def is_super_admin(role: str | None) -> bool:
    return _value(role) in SUPER_ADMIN_ROLES


def is_country_admin(role: str | None) -> bool:
    return role == AdminRole.COUNTRY_ADMIN or is_super_admin(role)


def is_regional_admin(role: str | None) -> bool:
    return role == AdminRole.REGIONAL_ADMIN or is_country_admin(role)


def is_organization_admin(role: str | None) -> bool:
    return role == AdminRole.ORGANIZATION_ADMIN or is_regional_admin(role)
