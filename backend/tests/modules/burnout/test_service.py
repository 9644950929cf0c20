# tests/modules/burnout/test_service.py
"""
Tests unitaires pour modules.burnout.service.BurnoutService

Couverture :
    evaluate_risk() :
        - Worker inconnu → LookupError
        - Historique lu via les repositories puis évalué par le moteur

    evaluate_and_record() :
        - Les alertes brouillons passent par alerts.record_drafts

    recommend_workload() :
        - Recommandation calculée depuis le même historique

    get_worker_health() / get_team_health() :
        - Moyennes survey arrondies à 0.1, alertes pending, dernier help signal

    get_debt() :
        - Pas de ledger → état neutre (0, stable, historique vide)

    apply_debt_delta() / settle_day() :
        - Jour par défaut = aujourd'hui UTC
        - settle_day : delta de la politique appliqué avec once_per_day
        - ALREADY_SETTLED propagé
"""
import pytest
from datetime import date
from unittest.mock import AsyncMock

from app.modules.burnout.service import BurnoutService
from app.shared.enums import AlertType, DebtTrend, Difficulty, RiskLevel
from tests.conftest import (
    NOW, TODAY, make_user, make_alert, make_debt_record, make_help_signal,
    make_survey, make_assignment, make_work_log, assignments_of, logs_of,
)

pytestmark = pytest.mark.service

service = BurnoutService()

MODULE = "app.modules.burnout.service"


def _worker(mocker, **kwargs):
    worker = make_user(**kwargs)
    mocker.patch(f"{MODULE}.team.require_worker", AsyncMock(return_value=worker))
    return worker


def _history(mocker, logs=(), assignments=(), surveys=(), signals=(), debt=None):
    mocker.patch(f"{MODULE}.activity_repo.get_work_logs", AsyncMock(return_value=list(logs)))
    mocker.patch(f"{MODULE}.assignment_repo.get_assignments", AsyncMock(return_value=list(assignments)))
    mocker.patch(f"{MODULE}.activity_repo.get_surveys", AsyncMock(return_value=list(surveys)))
    mocker.patch(f"{MODULE}.activity_repo.get_help_signals", AsyncMock(return_value=list(signals)))
    mocker.patch(f"{MODULE}.debt_repo.get_debt", AsyncMock(return_value=debt))


# ── Risque ────────────────────────────────────────────────────────────────────

class TestEvaluateRisk:
    @pytest.mark.asyncio
    async def test_worker_inconnu(self, mocker):
        mocker.patch(
            f"{MODULE}.team.require_worker",
            AsyncMock(side_effect=LookupError("WORKER_NOT_FOUND")),
        )
        with pytest.raises(LookupError):
            await service.evaluate_risk(AsyncMock(), 42, now=NOW)

    @pytest.mark.asyncio
    async def test_historique_evalue(self, mocker):
        _worker(mocker)
        _history(
            mocker,
            logs=logs_of(9.5, 9.0, 8.5),
            assignments=assignments_of(Difficulty.HARD, Difficulty.HARD, Difficulty.MEDIUM),
        )

        assessment = await service.evaluate_risk(AsyncMock(), 1, now=NOW)

        # écran 9.0h de moyenne (+20) + série hard 2 (+20)
        assert assessment.score == 40
        assert assessment.risk_level == RiskLevel.WARNING
        assert len(assessment.draft_alerts) == 1

    @pytest.mark.asyncio
    async def test_evaluate_and_record(self, mocker):
        _worker(mocker)
        _history(mocker, assignments=assignments_of(Difficulty.HARD, Difficulty.HARD, Difficulty.HARD))
        recorded = [make_alert(severity=RiskLevel.HIGH_RISK)]
        record_drafts = mocker.patch(f"{MODULE}.alerts.record_drafts", AsyncMock(return_value=recorded))

        result = await service.evaluate_and_record(AsyncMock(), 1, now=NOW)

        assert result["assessment"].score == 30
        assert result["recorded_alerts"] == recorded
        drafts = record_drafts.call_args.args[1]
        assert drafts[0].type == AlertType.CONSECUTIVE_HARD
        assert drafts[0].severity == RiskLevel.HIGH_RISK


# ── Recommandation ────────────────────────────────────────────────────────────

class TestRecommendWorkload:
    @pytest.mark.asyncio
    async def test_help_signal_recent(self, mocker):
        _worker(mocker)
        _history(mocker, signals=[make_help_signal()])

        rec = await service.recommend_workload(AsyncMock(), 1, now=NOW)

        assert rec.recommended_difficulty == Difficulty.EASY
        assert rec.worker_id == 1


# ── Santé ─────────────────────────────────────────────────────────────────────

class TestHealth:
    @pytest.mark.asyncio
    async def test_agregats(self, mocker):
        _worker(mocker, name="Arjun Mehta")
        signal = make_help_signal()
        _history(
            mocker,
            assignments=assignments_of(*[Difficulty.MEDIUM] * 7),
            surveys=[
                make_survey(stress_level=4, energy_level=2),
                make_survey(stress_level=3, energy_level=3),
                make_survey(stress_level=3, energy_level=3),
                make_survey(stress_level=3, energy_level=4),
            ],
            signals=[signal],
            debt=make_debt_record(current_debt=42),
        )
        mocker.patch(f"{MODULE}.alerts.count_pending", AsyncMock(return_value=2))

        health = await service.get_worker_health(AsyncMock(), 1, now=NOW)

        assert health["name"] == "Arjun Mehta"
        assert health["avg_stress"] == 3.3       # 3.25 arrondi commercial
        assert health["avg_energy"] == 3.0
        assert health["burnout_debt"] == 42
        assert health["active_alerts"] == 2
        assert health["last_help_signal"] == signal.timestamp
        assert len(health["recent_difficulties"]) == 5

    @pytest.mark.asyncio
    async def test_sans_survey(self, mocker):
        _worker(mocker)
        _history(mocker)
        mocker.patch(f"{MODULE}.alerts.count_pending", AsyncMock(return_value=0))

        health = await service.get_worker_health(AsyncMock(), 1, now=NOW)

        assert (health["avg_stress"], health["avg_energy"]) == (0.0, 0.0)
        assert health["last_help_signal"] is None
        assert health["risk_level"] == RiskLevel.SAFE

    @pytest.mark.asyncio
    async def test_equipe(self, mocker):
        workers = [make_user(id=1), make_user(id=2, name="Kavya Nair")]
        mocker.patch(f"{MODULE}.team.list_members", AsyncMock(return_value=workers))
        _history(mocker)
        mocker.patch(f"{MODULE}.alerts.count_pending", AsyncMock(return_value=0))

        team_health = await service.get_team_health(AsyncMock(), now=NOW)

        assert [h["worker_id"] for h in team_health] == [1, 2]


# ── Dette ─────────────────────────────────────────────────────────────────────

class TestDebt:
    @pytest.mark.asyncio
    async def test_etat_neutre(self, mocker):
        _worker(mocker)
        mocker.patch(f"{MODULE}.debt_repo.get_debt", AsyncMock(return_value=None))

        result = await service.get_debt(AsyncMock(), 1)

        assert result["current_debt"] == 0
        assert result["trend"] == DebtTrend.STABLE
        assert result["history"] == []

    @pytest.mark.asyncio
    async def test_ledger_existant(self, mocker):
        _worker(mocker)
        record = make_debt_record(current_debt=55)
        mocker.patch(f"{MODULE}.debt_repo.get_debt", AsyncMock(return_value=record))
        assert await service.get_debt(AsyncMock(), 1) is record

    @pytest.mark.asyncio
    async def test_delta_jour_par_defaut(self, mocker):
        _worker(mocker)
        apply = mocker.patch(
            f"{MODULE}.debt_repo.apply_delta",
            AsyncMock(return_value=make_debt_record(current_debt=8, trend=DebtTrend.INCREASING)),
        )

        result = await service.apply_debt_delta(AsyncMock(), 1, 8)

        assert result.current_debt == 8
        assert isinstance(apply.call_args.args[3], date)

    @pytest.mark.asyncio
    async def test_settle_day(self, mocker):
        _worker(mocker)
        mocker.patch(
            f"{MODULE}.assignment_repo.get_assignment",
            AsyncMock(return_value=make_assignment(difficulty=Difficulty.HARD)),
        )
        mocker.patch(
            f"{MODULE}.activity_repo.get_work_log",
            AsyncMock(return_value=make_work_log(screen_time_hours=9.5, breaks_taken=0, longest_session_minutes=60)),
        )
        apply = mocker.patch(
            f"{MODULE}.debt_repo.apply_delta",
            AsyncMock(return_value=make_debt_record(current_debt=13, trend=DebtTrend.INCREASING)),
        )

        await service.settle_day(AsyncMock(), 1, TODAY)

        args, kwargs = apply.call_args
        assert args[1:] == (1, 13, TODAY)
        assert kwargs["once_per_day"] is True

    @pytest.mark.asyncio
    async def test_settle_day_deja_solde(self, mocker):
        _worker(mocker)
        mocker.patch(f"{MODULE}.assignment_repo.get_assignment", AsyncMock(return_value=None))
        mocker.patch(f"{MODULE}.activity_repo.get_work_log", AsyncMock(return_value=None))
        mocker.patch(
            f"{MODULE}.debt_repo.apply_delta",
            AsyncMock(side_effect=ValueError("ALREADY_SETTLED")),
        )
        with pytest.raises(ValueError, match="ALREADY_SETTLED"):
            await service.settle_day(AsyncMock(), 1, TODAY)
