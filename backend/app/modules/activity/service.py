# modules/activity/service.py
"""
Saisie des signaux worker.

Un help signal est aussi une alerte : chaque envoi crée une alerte
help-signal (severity high-risk), sans déduplication — chaque appel compte.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.modules.activity.repository import ActivityRepository
from app.modules.alert.service import AlertService
from app.modules.team.service import TeamService
from app.shared.enums import AlertType, RiskLevel
from app.shared.models import WorkLog, WellbeingSurvey, HelpSignal

logger = logging.getLogger(__name__)

activity_repo = ActivityRepository()
team          = TeamService()
alerts        = AlertService()


class ActivityService:

    # ── Work logs ─────────────────────────────────────────────

    async def submit_work_log(self, db: AsyncSession, payload) -> WorkLog:
        await team.require_worker(db, payload.worker_id)
        return await activity_repo.upsert_work_log(db, payload)

    async def list_work_logs(
        self,
        db: AsyncSession,
        worker_id: Optional[int] = None,
        days: int = settings.DEFAULT_HISTORY_DAYS,
        today: Optional[date] = None,
    ) -> List[WorkLog]:
        """Logs depuis today − days (UTC). Sans worker_id : toute l'équipe."""
        since = (today or datetime.now(timezone.utc).date()) - timedelta(days=days)
        return await activity_repo.get_work_logs(db, worker_id, since=since)

    # ── Surveys ───────────────────────────────────────────────

    async def submit_survey(self, db: AsyncSession, payload) -> WellbeingSurvey:
        await team.require_worker(db, payload.worker_id)
        return await activity_repo.upsert_survey(db, payload)

    async def list_surveys(self, db: AsyncSession, worker_id: int) -> List[WellbeingSurvey]:
        return await activity_repo.get_surveys(db, worker_id)

    # ── Help signals ──────────────────────────────────────────

    async def send_help_signal(self, db: AsyncSession, worker_id: int, message: str) -> HelpSignal:
        worker = await team.require_worker(db, worker_id)
        signal = await activity_repo.create_help_signal(db, worker_id, message)

        await alerts.raise_alert(
            db,
            worker_id=worker_id,
            alert_type=AlertType.HELP_SIGNAL,
            severity=RiskLevel.HIGH_RISK,
            message=f"{worker.name} a envoyé un help signal",
            details=message,
        )
        logger.warning("Help signal reçu de worker=%s", worker_id)
        return signal

    async def list_help_signals(
        self, db: AsyncSession, worker_id: Optional[int] = None
    ) -> List[HelpSignal]:
        return await activity_repo.get_help_signals(db, worker_id=worker_id)

    async def mark_help_signal_read(self, db: AsyncSession, signal_id: int) -> HelpSignal:
        """Idempotent : un second appel conserve le read_at initial."""
        signal = await activity_repo.get_help_signal(db, signal_id)
        if not signal:
            raise LookupError("HELP_SIGNAL_NOT_FOUND")
        return await activity_repo.mark_read(db, signal)
