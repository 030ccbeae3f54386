"""Unit tests for the admin role hierarchy predicates."""

import pytest

from netadmin.models.enums import AdminRole
from netadmin.modules.governance.roles import (
    is_admin,
    is_country_admin,
    is_organization_admin,
    is_regional_admin,
    is_super_admin,
)

ALL_PREDICATES = [is_super_admin, is_country_admin, is_regional_admin, is_organization_admin]


@pytest.mark.parametrize("role", ["super_admin", "admin"])
def test_super_admin_and_legacy_alias_satisfy_every_level(role):
    assert all(predicate(role) for predicate in ALL_PREDICATES)


def test_country_admin_is_not_super_admin():
    assert not is_super_admin("country_admin")
    assert is_country_admin("country_admin")
    assert is_regional_admin("country_admin")
    assert is_organization_admin("country_admin")


def test_regional_admin_levels():
    assert not is_super_admin("regional_admin")
    assert not is_country_admin("regional_admin")
    assert is_regional_admin("regional_admin")
    assert is_organization_admin("regional_admin")


def test_organization_admin_is_lowest_tier():
    assert not is_regional_admin("organization_admin")
    assert is_organization_admin("organization_admin")


@pytest.mark.parametrize("role", ["mentor", "student", "", None, "SUPER_ADMIN"])
def test_non_admin_roles_fail_every_predicate(role):
    assert not is_admin(role)
    assert not any(predicate(role) for predicate in ALL_PREDICATES)


def test_enum_members_are_accepted():
    assert is_super_admin(AdminRole.SUPER_ADMIN)
    assert is_super_admin(AdminRole.ADMIN)
    assert is_admin(AdminRole.ORGANIZATION_ADMIN)
    assert is_country_admin(AdminRole.COUNTRY_ADMIN)
    assert not is_country_admin(AdminRole.REGIONAL_ADMIN)


def test_is_admin_recognises_all_five_roles():
    for role in ("super_admin", "admin", "country_admin", "regional_admin", "organization_admin"):
        assert is_admin(role)
