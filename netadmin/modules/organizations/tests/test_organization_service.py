"""Unit tests for OrganizationService: scoped listing and governance actions."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from netadmin.exceptions import BusinessRuleException, NotFoundException, ScopeViolationException
from netadmin.models.audit_log import AuditLog
from netadmin.models.enums import AuditAction, ComplianceStatus, OrganizationStatus
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.organizations.service import OrganizationService

KENYA_ADMIN = AdminContext(user_id="ke-1", role="country_admin", country="Kenya", name="Wanjiru")
COAST_ADMIN = AdminContext(user_id="co-1", role="regional_admin", country="Kenya", region="Coast")
ORG_ADMIN = AdminContext(user_id="oa-1", role="organization_admin", organization_id="org-1")


@pytest.fixture
def mock_db():
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    return session


def _org(**overrides):
    values = dict(
        id="org-1",
        name="Nairobi Robotics",
        country="Kenya",
        region="Nairobi",
        status=OrganizationStatus.PENDING,
        compliance_status=ComplianceStatus.PENDING,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def _returning(org):
    result = MagicMock()
    result.scalar_one_or_none.return_value = org
    return result


class TestListOrganizations:
    @pytest.mark.asyncio
    async def test_country_admin_query_is_scoped(self, mock_db):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db.execute.return_value = result

        await OrganizationService(mock_db).list_organizations(KENYA_ADMIN, status=OrganizationStatus.ACTIVE)

        stmt = mock_db.execute.call_args.args[0]
        sql = str(stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))
        assert "organizations.country = 'Kenya'" in sql
        assert "organizations.status = 'active'" in sql
        assert "ORDER BY organizations.name ASC" in sql

    @pytest.mark.asyncio
    async def test_admin_without_scope_skips_query(self, mock_db):
        ctx = AdminContext(user_id="x", role="regional_admin")

        assert await OrganizationService(mock_db).list_organizations(ctx) == []
        mock_db.execute.assert_not_awaited()


class TestGetOrganization:
    @pytest.mark.asyncio
    async def test_out_of_scope(self, mock_db):
        mock_db.execute.return_value = _returning(_org(country="Uganda"))

        with pytest.raises(ScopeViolationException):
            await OrganizationService(mock_db).get_organization("org-1", KENYA_ADMIN)

    @pytest.mark.asyncio
    async def test_missing(self, mock_db):
        mock_db.execute.return_value = _returning(None)

        with pytest.raises(NotFoundException):
            await OrganizationService(mock_db).get_organization("nope", KENYA_ADMIN)

    @pytest.mark.asyncio
    async def test_org_admin_views_own(self, mock_db):
        org = _org()
        mock_db.execute.return_value = _returning(org)

        assert await OrganizationService(mock_db).get_organization("org-1", ORG_ADMIN) is org


class TestStatusChanges:
    @pytest.mark.asyncio
    async def test_approve_in_scope_records_audit(self, mock_db):
        org = _org()
        mock_db.execute.return_value = _returning(org)
        svc = OrganizationService(mock_db, audit_options={"ip_address": "10.0.0.2", "user_agent": None})

        await svc.approve_organization("org-1", KENYA_ADMIN, reason="documents verified")

        assert org.status == OrganizationStatus.ACTIVE
        entry = mock_db.add.call_args.args[0]
        assert isinstance(entry, AuditLog)
        assert entry.action == AuditAction.ORGANIZATION_APPROVED
        assert entry.ip_address == "10.0.0.2"
        assert entry.details == {"from": "pending", "to": "active", "reason": "documents verified"}

    @pytest.mark.asyncio
    async def test_regional_admin_cannot_suspend_outside_region(self, mock_db):
        mock_db.execute.return_value = _returning(_org(status=OrganizationStatus.ACTIVE))

        with pytest.raises(ScopeViolationException):
            await OrganizationService(mock_db).suspend_organization("org-1", COAST_ADMIN)
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_org_admin_cannot_manage_own_org(self, mock_db):
        mock_db.execute.return_value = _returning(_org())

        with pytest.raises(ScopeViolationException):
            await OrganizationService(mock_db).approve_organization("org-1", ORG_ADMIN)

    @pytest.mark.asyncio
    async def test_repeat_transition_rejected(self, mock_db):
        mock_db.execute.return_value = _returning(_org(status=OrganizationStatus.SUSPENDED))

        with pytest.raises(BusinessRuleException):
            await OrganizationService(mock_db).suspend_organization("org-1", KENYA_ADMIN)


class TestReviewCompliance:
    @pytest.mark.asyncio
    async def test_approve(self, mock_db):
        org = _org()
        mock_db.execute.return_value = _returning(org)

        await OrganizationService(mock_db).review_compliance("org-1", KENYA_ADMIN, approved=True)

        assert org.compliance_status == ComplianceStatus.APPROVED
        assert mock_db.add.call_args.args[0].action == AuditAction.COMPLIANCE_APPROVED

    @pytest.mark.asyncio
    async def test_reject_with_notes(self, mock_db):
        org = _org()
        mock_db.execute.return_value = _returning(org)

        await OrganizationService(mock_db).review_compliance("org-1", KENYA_ADMIN, approved=False, notes="expired")

        assert org.compliance_status == ComplianceStatus.REJECTED
        assert mock_db.add.call_args.args[0].details == {"notes": "expired"}

    @pytest.mark.asyncio
    async def test_country_admin_blocked_outside_country(self, mock_db):
        mock_db.execute.return_value = _returning(_org(country="Uganda"))

        with pytest.raises(ScopeViolationException):
            await OrganizationService(mock_db).review_compliance("org-1", KENYA_ADMIN, approved=True)

    @pytest.mark.asyncio
    async def test_nothing_pending(self, mock_db):
        mock_db.execute.return_value = _returning(_org(compliance_status=ComplianceStatus.APPROVED))

        with pytest.raises(BusinessRuleException):
            await OrganizationService(mock_db).review_compliance("org-1", KENYA_ADMIN, approved=True)
