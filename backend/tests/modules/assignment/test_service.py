# tests/modules/assignment/test_service.py
"""
Tests unitaires pour modules.assignment.service.AssignmentService

Couverture :
    create_assignment() :
        - Override sans raison → ValueError "OVERRIDE_REASON_REQUIRED" (avant toute lecture)
        - assigned_by n'est pas un leader → ValueError "NOT_A_LEADER"
        - Worker inconnu → LookupError
        - Succès (avec ou sans override) → upsert_assignment

    list_assignments() :
        - Fenêtre since = today − days (today = date UTC)
        - Sans worker_id → toute l'équipe
"""
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from app.modules.assignment.schemas import AssignmentIn
from app.modules.assignment.service import AssignmentService
from app.shared.enums import Difficulty
from tests.conftest import TODAY, make_user, make_leader, make_assignment

pytestmark = pytest.mark.service

service = AssignmentService()


def _payload(**kwargs) -> AssignmentIn:
    defaults = {
        "worker_id": 1,
        "assigned_by_id": 100,
        "date": TODAY,
        "difficulty": Difficulty.HARD,
        "task_title": "Migration base de données",
        "recommended_difficulty": Difficulty.MEDIUM,
    }
    defaults.update(kwargs)
    return AssignmentIn(**defaults)


def _team_ok(mocker):
    mocker.patch("app.modules.assignment.service.team.require_leader", AsyncMock(return_value=make_leader()))
    mocker.patch("app.modules.assignment.service.team.require_worker", AsyncMock(return_value=make_user()))


class TestCreateAssignment:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason", [None, "", "   "])
    async def test_override_sans_raison(self, mocker, reason):
        require_leader = mocker.patch("app.modules.assignment.service.team.require_leader", AsyncMock())
        with pytest.raises(ValueError, match="OVERRIDE_REASON_REQUIRED"):
            await service.create_assignment(AsyncMock(), _payload(was_override=True, override_reason=reason))
        require_leader.assert_not_called()

    @pytest.mark.asyncio
    async def test_pas_un_leader(self, mocker):
        mocker.patch(
            "app.modules.assignment.service.team.require_leader",
            AsyncMock(side_effect=ValueError("NOT_A_LEADER")),
        )
        upsert = mocker.patch("app.modules.assignment.service.assignment_repo.upsert_assignment", AsyncMock())
        with pytest.raises(ValueError, match="NOT_A_LEADER"):
            await service.create_assignment(AsyncMock(), _payload())
        upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_worker_inconnu(self, mocker):
        mocker.patch("app.modules.assignment.service.team.require_leader", AsyncMock(return_value=make_leader()))
        mocker.patch(
            "app.modules.assignment.service.team.require_worker",
            AsyncMock(side_effect=LookupError("WORKER_NOT_FOUND")),
        )
        with pytest.raises(LookupError):
            await service.create_assignment(AsyncMock(), _payload(worker_id=42))

    @pytest.mark.asyncio
    async def test_succes_sans_override(self, mocker):
        _team_ok(mocker)
        assignment = make_assignment(difficulty=Difficulty.HARD)
        upsert = mocker.patch(
            "app.modules.assignment.service.assignment_repo.upsert_assignment",
            AsyncMock(return_value=assignment),
        )
        payload = _payload()

        assert await service.create_assignment(AsyncMock(), payload) is assignment
        upsert.assert_awaited_once()
        assert upsert.call_args.args[1] is payload

    @pytest.mark.asyncio
    async def test_succes_override_justifie(self, mocker):
        _team_ok(mocker)
        assignment = make_assignment(difficulty=Difficulty.HARD, was_override=True, override_reason="Deadline client")
        mocker.patch(
            "app.modules.assignment.service.assignment_repo.upsert_assignment",
            AsyncMock(return_value=assignment),
        )

        result = await service.create_assignment(
            AsyncMock(), _payload(was_override=True, override_reason="Deadline client")
        )
        assert result.was_override is True


class TestListAssignments:
    @pytest.mark.asyncio
    async def test_fenetre_par_worker(self, mocker):
        get_assignments = mocker.patch(
            "app.modules.assignment.service.assignment_repo.get_assignments",
            AsyncMock(return_value=[make_assignment()]),
        )
        await service.list_assignments(AsyncMock(), 1, days=7, today=TODAY)

        assert get_assignments.call_args.args[1] == 1
        assert get_assignments.call_args.kwargs["since"] == TODAY - timedelta(days=7)

    @pytest.mark.asyncio
    async def test_equipe_jour_utc(self, mocker):
        get_assignments = mocker.patch(
            "app.modules.assignment.service.assignment_repo.get_assignments",
            AsyncMock(return_value=[make_assignment(worker_id=1), make_assignment(worker_id=2)]),
        )
        clock = mocker.patch("app.modules.assignment.service.datetime")
        clock.now.return_value = datetime(2025, 3, 14, 23, 30, tzinfo=timezone.utc)

        result = await service.list_assignments(AsyncMock(), days=14)

        assert [a.worker_id for a in result] == [1, 2]
        assert get_assignments.call_args.args[1] is None
        assert get_assignments.call_args.kwargs["since"] == TODAY - timedelta(days=14)
        clock.now.assert_called_once_with(timezone.utc)
