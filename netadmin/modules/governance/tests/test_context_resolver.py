"""Unit tests for AdminContext resolution and the governance dependencies."""

import pytest

from netadmin.exceptions import ForbiddenException
from netadmin.modules.governance.auth import AuthenticatedUser
from netadmin.modules.governance.context import AdminContext, read_field, resolve_admin_context
from netadmin.modules.governance.dependencies import require_admin, require_capability
from netadmin.modules.governance.permissions import can_view_audit_logs


def test_resolve_from_authenticated_user():
    user = AuthenticatedUser(
        id="u1",
        name="Amina",
        role="country_admin",
        country="Kenya",
        managed_countries=["Kenya", "Tanzania"],
    )
    ctx = resolve_admin_context(user)
    assert ctx == AdminContext(
        user_id="u1",
        role="country_admin",
        country="Kenya",
        managed_countries=("Kenya", "Tanzania"),
        name="Amina",
    )


def test_resolve_from_mapping_normalizes_blanks_and_case():
    ctx = resolve_admin_context(
        {"user_id": "u2", "role": " Regional_Admin ", "country": "", "region": "  ", "organization_id": None}
    )
    assert ctx.role == "regional_admin"
    assert ctx.country is None
    assert ctx.region is None
    assert ctx.organization_id is None


def test_managed_lists_drop_blanks_and_ignore_plain_strings():
    ctx = resolve_admin_context({"user_id": "u3", "role": "super_admin", "managed_regions": ["Coast", "", None]})
    assert ctx.managed_regions == ("Coast",)
    ctx = resolve_admin_context({"user_id": "u3", "role": "super_admin", "managed_regions": "Coast"})
    assert ctx.managed_regions == ()


def test_missing_profile_fields():
    ctx = resolve_admin_context({})
    assert ctx.user_id == ""
    assert ctx.role == ""


def test_read_field_handles_none_mapping_and_objects():
    assert read_field(None, "x") is None
    assert read_field({"x": 1}, "x") == 1
    assert read_field(AdminContext(user_id="u", role="r"), "role") == "r"
    assert read_field(object(), "missing") is None


class TestRequireAdmin:
    def test_admin_passes_through(self):
        ctx = AdminContext(user_id="u1", role="organization_admin", organization_id="org-1")
        assert require_admin(ctx) is ctx

    def test_non_admin_rejected(self):
        with pytest.raises(ForbiddenException, match="Admin"):
            require_admin(AdminContext(user_id="u1", role="mentor"))


class TestRequireCapability:
    def test_capability_granted(self):
        check = require_capability(can_view_audit_logs, "view audit logs")
        ctx = AdminContext(user_id="u1", role="country_admin", country="Kenya")
        assert check(ctx) is ctx

    def test_capability_denied(self):
        check = require_capability(can_view_audit_logs, "view audit logs")
        with pytest.raises(ForbiddenException, match="view audit logs"):
            check(AdminContext(user_id="u1", role="regional_admin", region="Coast"))
