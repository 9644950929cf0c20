# modules/accountability/service.py
"""
Indice d'accountability du leader.
Le calcul est dans engine/burnout/accountability.py — ici, uniquement la lecture.
"""
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.engine.burnout import accountability as accountability_engine
from app.engine.burnout.accountability import AccountabilityIndex
from app.modules.alert.service import AlertService
from app.modules.assignment.repository import AssignmentRepository
from app.modules.team.service import TeamService
from app.shared.enums import UserRole

assignment_repo = AssignmentRepository()
team            = TeamService()
alerts          = AlertService()


class AccountabilityService:

    async def compute_accountability(
        self, db: AsyncSession, leader_id: int, today: Optional[date] = None
    ) -> AccountabilityIndex:
        await team.require_leader(db, leader_id)

        assignments = await assignment_repo.get_assignments_by_leader(db, leader_id)
        workers     = await team.list_members(db, role=UserRole.WORKER)
        pending     = await alerts.count_pending(db)   # global, pas filtré par leader

        return accountability_engine.compute(
            leader_id=leader_id,
            assignments=assignments,
            workers=workers,
            pending_alert_count=pending,
            today=today or datetime.now(timezone.utc).date(),
        )
