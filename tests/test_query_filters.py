"""Tests for the tagged query filters and their SQL translation."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from netadmin.database.filters import AnyOf, ArrayContains, Equals, Range, apply_filters, apply_ordering, to_predicate
from netadmin.models.admin_message import AdminMessage
from netadmin.models.audit_log import AuditLog
from netadmin.models.enums import OrganizationStatus
from netadmin.models.organization import Organization


def _sql(clause) -> str:
    return str(clause.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))


class TestToPredicate:
    def test_equals(self):
        assert _sql(to_predicate(Organization, Equals("country", "Kenya"))) == "organizations.country = 'Kenya'"

    def test_equals_none_is_null_check(self):
        assert _sql(to_predicate(AdminMessage, Equals("sent_at", None))) == "admin_messages.sent_at IS NULL"

    def test_equals_enum_binds_value(self):
        clause = to_predicate(Organization, Equals("status", OrganizationStatus.SUSPENDED))
        assert _sql(clause) == "organizations.status = 'suspended'"

    def test_range_both_bounds(self):
        start = datetime(2026, 1, 1, tzinfo=UTC)
        end = datetime(2026, 2, 1, tzinfo=UTC)
        assert "BETWEEN" in _sql(to_predicate(AuditLog, Range("timestamp", gte=start, lte=end)))

    def test_range_single_bounds(self):
        assert ">=" in _sql(to_predicate(Organization, Range("name", gte="M")))
        assert "<=" in _sql(to_predicate(Organization, Range("name", lte="M")))

    def test_range_requires_a_bound(self):
        with pytest.raises(ValueError, match="gte or lte"):
            Range("timestamp")

    def test_array_contains(self):
        sql = str(to_predicate(AdminMessage, ArrayContains("read_by", "u1")).compile(dialect=postgresql.dialect()))
        assert "admin_messages.read_by @>" in sql

    def test_any_of(self):
        assert _sql(to_predicate(Organization, AnyOf("id", ("a", "b")))) == "organizations.id IN ('a', 'b')"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="no mapped column"):
            to_predicate(Organization, Equals("colour", "red"))


def test_apply_filters_and_ordering():
    stmt = apply_filters(
        select(Organization),
        Organization,
        [Equals("country", "Kenya"), Equals("region", "Coast")],
    )
    stmt = apply_ordering(stmt, Organization, "name", descending=False)
    sql = _sql(stmt)
    assert "organizations.country = 'Kenya' AND organizations.region = 'Coast'" in sql
    assert sql.endswith("ORDER BY organizations.name ASC")


def test_apply_filters_without_filters_leaves_statement_unchanged():
    stmt = select(Organization)
    assert apply_filters(stmt, Organization, []) is stmt
