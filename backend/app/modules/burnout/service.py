# modules/burnout/service.py
"""
Orchestration du moteur burnout.

Rôle : lire l'historique du worker via les repositories, le figer dans un
WorkerHistory, le passer à engine/burnout (fonctions pures), puis persister
ce que le moteur produit (alertes brouillons, dette).

    evaluate_risk        → engine.risk.evaluate           (lecture seule)
    evaluate_and_record  → evaluate_risk + alert.record_drafts (dédupliqué)
    recommend_workload   → engine.recommendation.recommend
    get_worker_health    → risque + agrégats surveys / alertes / help signals
    apply_debt_delta     → BurnoutDebtRepository.apply_delta (verrou de ligne)
    settle_day           → engine.debt.daily_delta du jour, appliqué une seule fois
"""
import logging
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.engine.burnout import debt as debt_engine
from app.engine.burnout import risk as risk_engine
from app.engine.burnout.recommendation import Recommendation, RecommendationContext, RECENT_WINDOW, recommend
from app.engine.burnout.risk import RiskAssessment
from app.engine.burnout.signals import WorkerHistory, survey_averages
from app.modules.activity.repository import ActivityRepository
from app.modules.alert.service import AlertService
from app.modules.assignment.repository import AssignmentRepository
from app.modules.burnout.repository import BurnoutDebtRepository
from app.modules.team.service import TeamService
from app.shared.enums import DebtTrend, UserRole
from app.shared.models import User

logger = logging.getLogger(__name__)

activity_repo   = ActivityRepository()
assignment_repo = AssignmentRepository()
debt_repo       = BurnoutDebtRepository()
team            = TeamService()
alerts          = AlertService()


class BurnoutService:

    # ── Historique ────────────────────────────────────────────

    async def load_history(self, db: AsyncSession, worker_id: int) -> WorkerHistory:
        """Instantané borné aux fenêtres lues par le moteur."""
        return WorkerHistory(
            worker_id=worker_id,
            work_logs=await activity_repo.get_work_logs(db, worker_id, limit=risk_engine.LOG_WINDOW),
            assignments=await assignment_repo.get_assignments(db, worker_id, limit=risk_engine.ASSIGNMENT_WINDOW),
            surveys=await activity_repo.get_surveys(db, worker_id, limit=risk_engine.SURVEY_WINDOW),
            help_signals=await activity_repo.get_help_signals(db, worker_id=worker_id),
            debt_record=await debt_repo.get_debt(db, worker_id),
        )

    # ── Risque ────────────────────────────────────────────────

    async def evaluate_risk(
        self, db: AsyncSession, worker_id: int, now: Optional[datetime] = None
    ) -> RiskAssessment:
        await team.require_worker(db, worker_id)
        history = await self.load_history(db, worker_id)
        return risk_engine.evaluate(history, now=now)

    async def evaluate_and_record(
        self, db: AsyncSession, worker_id: int, now: Optional[datetime] = None
    ) -> Dict:
        assessment = await self.evaluate_risk(db, worker_id, now=now)
        recorded = await alerts.record_drafts(db, assessment.draft_alerts)
        logger.info(
            "Risque worker=%s : %s (%s/100), %d alerte(s) enregistrée(s)",
            worker_id, assessment.risk_level.value, assessment.score, len(recorded),
        )
        return {"assessment": assessment, "recorded_alerts": recorded}

    # ── Recommandation ────────────────────────────────────────

    async def recommend_workload(
        self, db: AsyncSession, worker_id: int, now: Optional[datetime] = None
    ) -> Recommendation:
        await team.require_worker(db, worker_id)
        history = await self.load_history(db, worker_id)
        assessment = risk_engine.evaluate(history, now=now)
        return recommend(RecommendationContext.from_history(history, assessment))

    # ── Santé ─────────────────────────────────────────────────

    async def get_worker_health(
        self, db: AsyncSession, worker_id: int, now: Optional[datetime] = None
    ) -> Dict:
        worker = await team.require_worker(db, worker_id)
        return await self._health_for(db, worker, now)

    async def get_team_health(
        self, db: AsyncSession, now: Optional[datetime] = None
    ) -> List[Dict]:
        workers = await team.list_members(db, role=UserRole.WORKER)
        return [await self._health_for(db, worker, now) for worker in workers]

    # ── Dette ─────────────────────────────────────────────────

    async def get_debt(self, db: AsyncSession, worker_id: int):
        """Ledger du worker, ou un état neutre (0, stable, sans historique)."""
        await team.require_worker(db, worker_id)
        record = await debt_repo.get_debt(db, worker_id)
        if record is None:
            return {
                "worker_id": worker_id,
                "current_debt": debt_engine.DEBT_MIN,
                "trend": DebtTrend.STABLE,
                "last_updated": None,
                "history": [],
            }
        return record

    async def apply_debt_delta(
        self, db: AsyncSession, worker_id: int, delta: int, day: Optional[date] = None
    ):
        await team.require_worker(db, worker_id)
        day = day or datetime.now(timezone.utc).date()
        record = await debt_repo.apply_delta(db, worker_id, delta, day)
        logger.info(
            "Dette worker=%s : delta %+d → %s (%s)",
            worker_id, delta, record.current_debt, record.trend.value,
        )
        return record

    async def settle_day(self, db: AsyncSession, worker_id: int, day: date):
        """Applique la politique quotidienne de référence au jour donné, une seule fois."""
        await team.require_worker(db, worker_id)
        assignment = await assignment_repo.get_assignment(db, worker_id, day)
        work_log = await activity_repo.get_work_log(db, worker_id, day)

        delta = debt_engine.daily_delta(day, assignment, work_log)
        record = await debt_repo.apply_delta(db, worker_id, delta, day, once_per_day=True)
        logger.info("Journée %s soldée pour worker=%s : delta %+d → %s", day, worker_id, delta, record.current_debt)
        return record

    # ── Internals ─────────────────────────────────────────────

    async def _health_for(self, db: AsyncSession, worker: User, now: Optional[datetime]) -> Dict:
        history = await self.load_history(db, worker.id)
        assessment = risk_engine.evaluate(history, now=now)
        avg_stress, avg_energy = survey_averages(history.surveys)

        return {
            "worker_id":           worker.id,
            "name":                worker.name,
            "risk_level":          assessment.risk_level,
            "risk_score":          assessment.score,
            "burnout_debt":        history.debt.current,
            "avg_stress":          avg_stress,
            "avg_energy":          avg_energy,
            "recent_difficulties": [a.difficulty for a in history.assignments[:RECENT_WINDOW]],
            "active_alerts":       await alerts.count_pending(db, worker_id=worker.id),
            "last_help_signal":    history.help_signals[0].timestamp if history.help_signals else None,
            "factors":             assessment.factors,
        }
