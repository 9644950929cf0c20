# modules/assignment/service.py
"""
Assignation quotidienne par le leader.

Contrôles avant écriture :
    - override déclaré → raison non vide obligatoire (OVERRIDE_REASON_REQUIRED)
    - assigned_by_id   → utilisateur existant de rôle leader
    - worker_id        → utilisateur existant de rôle worker
Une nouvelle assignation sur le même (worker, jour) remplace la précédente.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.modules.assignment.repository import AssignmentRepository
from app.modules.team.service import TeamService
from app.shared.models import Assignment

logger = logging.getLogger(__name__)

assignment_repo = AssignmentRepository()
team            = TeamService()


class AssignmentService:

    async def create_assignment(self, db: AsyncSession, payload) -> Assignment:
        if payload.was_override and not (payload.override_reason or "").strip():
            raise ValueError("OVERRIDE_REASON_REQUIRED")

        await team.require_leader(db, payload.assigned_by_id)
        await team.require_worker(db, payload.worker_id)

        assignment = await assignment_repo.upsert_assignment(db, payload)
        if payload.was_override:
            logger.info(
                "Override leader=%s worker=%s : %s au lieu de %s (%s)",
                payload.assigned_by_id, payload.worker_id,
                payload.difficulty.value,
                payload.recommended_difficulty.value if payload.recommended_difficulty else "-",
                payload.override_reason,
            )
        return assignment

    async def list_assignments(
        self,
        db: AsyncSession,
        worker_id: Optional[int] = None,
        days: int = settings.DEFAULT_HISTORY_DAYS,
        today: Optional[date] = None,
    ) -> List[Assignment]:
        """Assignations depuis today − days (UTC). Sans worker_id : toute l'équipe."""
        since = (today or datetime.now(timezone.utc).date()) - timedelta(days=days)
        return await assignment_repo.get_assignments(db, worker_id, since=since)
