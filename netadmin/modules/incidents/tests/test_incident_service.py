"""Unit tests for IncidentService and incident scope containment."""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from netadmin.exceptions import NotFoundException, ScopeViolationException
from netadmin.models.enums import IncidentPriority, IncidentStatus, IncidentType
from netadmin.models.incident import Incident
from netadmin.modules.governance.context import AdminContext
from netadmin.modules.incidents.schemas import IncidentCreate
from netadmin.modules.incidents.service import IncidentService, incident_in_scope

SUPER = AdminContext(user_id="s-1", role="super_admin")
KENYA_ADMIN = AdminContext(user_id="ke-1", role="country_admin", country="Kenya")
COAST_ADMIN = AdminContext(user_id="co-1", role="regional_admin", region="Coast")
ORG_ADMIN = AdminContext(user_id="oa-1", role="organization_admin", organization_id="org-1", name="Otieno")
REPORTER = AdminContext(user_id="mentor-1", role="mentor")


@pytest.fixture
def mock_db():
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    return session


def _incident(**overrides):
    values = dict(
        id="inc-1",
        organization_id="org-1",
        organization_country="Kenya",
        organization_region="Nairobi",
        title="Injury at workshop",
        status=IncidentStatus.OPEN,
        priority=IncidentPriority.MEDIUM,
        notes=[],
        resolved_at=None,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def _returning(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))


class TestIncidentInScope:
    def test_country_admin_contained_by_country(self):
        assert incident_in_scope(KENYA_ADMIN, _incident())
        assert not incident_in_scope(KENYA_ADMIN, _incident(organization_country="Uganda"))

    def test_regional_admin_contained_by_region(self):
        assert not incident_in_scope(COAST_ADMIN, _incident())
        assert incident_in_scope(COAST_ADMIN, _incident(organization_region="Coast"))

    def test_org_admin_own_org_only(self):
        assert incident_in_scope(ORG_ADMIN, _incident())
        assert not incident_in_scope(ORG_ADMIN, _incident(organization_id="org-2"))

    def test_org_admin_without_org_never_sees_orphans(self):
        ctx = AdminContext(user_id="x", role="organization_admin")
        assert not incident_in_scope(ctx, _incident(organization_id=None))

    def test_super_admin_sees_all(self):
        assert incident_in_scope(SUPER, _incident(organization_country=None, organization_id=None))


class TestCreateIncident:
    @pytest.mark.asyncio
    async def test_denormalizes_organization_location(self, mock_db):
        mock_db.execute.return_value = _returning(SimpleNamespace(id="org-1", country="Kenya", region="Coast"))
        data = IncidentCreate(
            organization_id="org-1",
            title="Fall",
            description="Student fell",
            type=IncidentType.INJURY,
            priority=IncidentPriority.HIGH,
            minors_involved=True,
        )

        incident = await IncidentService(mock_db).create_incident(data, REPORTER)

        assert isinstance(incident, Incident)
        assert incident.organization_country == "Kenya"
        assert incident.organization_region == "Coast"
        assert incident.reported_by == "mentor-1"
        assert incident.status == IncidentStatus.OPEN
        assert incident.notes == []
        assert mock_db.add.call_count == 2

    @pytest.mark.asyncio
    async def test_unknown_organization(self, mock_db):
        mock_db.execute.return_value = _returning(None)
        data = IncidentCreate(organization_id="nope", title="x", description="y", type=IncidentType.OTHER)

        with pytest.raises(NotFoundException):
            await IncidentService(mock_db).create_incident(data, REPORTER)


class TestListIncidents:
    @pytest.mark.asyncio
    async def test_regional_admin_filtered_by_incident_region(self, mock_db):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db.execute.return_value = result

        await IncidentService(mock_db).list_incidents(COAST_ADMIN, status=IncidentStatus.OPEN)

        sql = _sql(mock_db.execute.call_args.args[0])
        assert "incidents.organization_region = 'Coast'" in sql
        assert "incidents.status = 'open'" in sql
        assert "ORDER BY incidents.created_at DESC" in sql

    @pytest.mark.asyncio
    async def test_no_scope_returns_empty_without_query(self, mock_db):
        ctx = AdminContext(user_id="x", role="country_admin")

        assert await IncidentService(mock_db).list_incidents(ctx) == []
        mock_db.execute.assert_not_awaited()


class TestTriage:
    @pytest.mark.asyncio
    async def test_assign_moves_to_under_review(self, mock_db):
        incident = _incident()
        mock_db.execute.return_value = _returning(incident)

        await IncidentService(mock_db).assign_incident("inc-1", "co-2", "Baraka", KENYA_ADMIN)

        assert incident.assigned_to == "co-2"
        assert incident.status == IncidentStatus.UNDER_REVIEW

    @pytest.mark.asyncio
    async def test_org_admin_cannot_triage(self, mock_db):
        mock_db.execute.return_value = _returning(_incident())

        with pytest.raises(ScopeViolationException):
            await IncidentService(mock_db).update_incident_priority("inc-1", IncidentPriority.LOW, ORG_ADMIN)

    @pytest.mark.asyncio
    async def test_resolving_stamps_resolved_at(self, mock_db):
        incident = _incident()
        mock_db.execute.return_value = _returning(incident)

        await IncidentService(mock_db).update_incident_status("inc-1", IncidentStatus.RESOLVED, SUPER)

        assert incident.status == IncidentStatus.RESOLVED
        assert incident.resolved_at is not None
        assert mock_db.add.call_args.args[0].details == {"from": "open", "to": "resolved"}

    @pytest.mark.asyncio
    async def test_reopening_clears_resolved_at(self, mock_db):
        incident = _incident(status=IncidentStatus.RESOLVED, resolved_at=datetime(2026, 3, 1, tzinfo=UTC))
        mock_db.execute.return_value = _returning(incident)

        await IncidentService(mock_db).update_incident_status("inc-1", IncidentStatus.OPEN, SUPER)

        assert incident.status == IncidentStatus.OPEN
        assert incident.resolved_at is None
        assert mock_db.add.call_args.args[0].details == {"from": "resolved", "to": "open"}

    @pytest.mark.asyncio
    async def test_out_of_scope_incident(self, mock_db):
        mock_db.execute.return_value = _returning(_incident(organization_country="Uganda"))

        with pytest.raises(ScopeViolationException):
            await IncidentService(mock_db).get_incident("inc-1", KENYA_ADMIN)


class TestAddNote:
    @pytest.mark.asyncio
    async def test_note_appended_in_single_update(self, mock_db):
        mock_db.execute.side_effect = [_returning(_incident()), _returning("inc-1")]

        note = await IncidentService(mock_db).add_incident_note("inc-1", "Parents informed", ORG_ADMIN)

        assert note["author_name"] == "Otieno"
        assert note["content"] == "Parents informed"
        update_stmt = mock_db.execute.call_args_list[1].args[0]
        sql = str(update_stmt.compile(dialect=postgresql.dialect()))
        assert sql.startswith("UPDATE incidents SET")
        assert "incidents.notes ||" in sql
        assert "RETURNING incidents.id" in sql

    @pytest.mark.asyncio
    async def test_incident_vanished_before_update(self, mock_db):
        mock_db.execute.side_effect = [_returning(_incident()), _returning(None)]

        with pytest.raises(NotFoundException):
            await IncidentService(mock_db).add_incident_note("inc-1", "x", SUPER)


@pytest.mark.asyncio
async def test_organization_stats(mock_db):
    result = MagicMock()
    result.one.return_value = (5, 3, 2, 1)
    mock_db.execute.return_value = result

    stats = await IncidentService(mock_db).get_organization_incident_stats("org-1")

    assert stats == {"total": 5, "open": 3, "high_priority": 2, "with_minors": 1}
