# modules/activity/repository.py
"""
Accès DB pour les signaux worker : work logs, surveys hebdomadaires, help signals.

WorkLog et WellbeingSurvey : upsert sur le créneau (worker, jour) / (worker, semaine).
Toutes les listes sont retournées du plus récent au plus ancien,
l'ordre attendu par engine/burnout.
"""
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.models import WorkLog, WellbeingSurvey, HelpSignal


class ActivityRepository:

    # ── Work logs ─────────────────────────────────────────────

    async def get_work_log(
        self, db: AsyncSession, worker_id: int, day: date
    ) -> Optional[WorkLog]:
        r = await db.execute(
            select(WorkLog).where(WorkLog.worker_id == worker_id, WorkLog.date == day)
        )
        return r.scalar_one_or_none()

    async def get_work_logs(
        self,
        db: AsyncSession,
        worker_id: Optional[int] = None,
        since: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[WorkLog]:
        """worker_id=None : toute l'équipe."""
        query = select(WorkLog).order_by(WorkLog.date.desc(), WorkLog.worker_id)
        if worker_id is not None:
            query = query.where(WorkLog.worker_id == worker_id)
        if since is not None:
            query = query.where(WorkLog.date >= since)
        if limit is not None:
            query = query.limit(limit)
        r = await db.execute(query)
        return r.scalars().all()

    async def upsert_work_log(self, db: AsyncSession, payload) -> WorkLog:
        fields = payload.model_dump(exclude={"worker_id", "date"})
        db_obj = await self.get_work_log(db, payload.worker_id, payload.date)
        if db_obj:
            for key, value in fields.items():
                setattr(db_obj, key, value)
        else:
            db_obj = WorkLog(worker_id=payload.worker_id, date=payload.date, **fields)
            db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    # ── Surveys ───────────────────────────────────────────────

    async def get_survey(
        self, db: AsyncSession, worker_id: int, week_date: date
    ) -> Optional[WellbeingSurvey]:
        r = await db.execute(
            select(WellbeingSurvey).where(
                WellbeingSurvey.worker_id == worker_id,
                WellbeingSurvey.week_date == week_date,
            )
        )
        return r.scalar_one_or_none()

    async def get_surveys(
        self, db: AsyncSession, worker_id: int, limit: Optional[int] = None
    ) -> List[WellbeingSurvey]:
        query = (
            select(WellbeingSurvey)
            .where(WellbeingSurvey.worker_id == worker_id)
            .order_by(WellbeingSurvey.week_date.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        r = await db.execute(query)
        return r.scalars().all()

    async def upsert_survey(self, db: AsyncSession, payload) -> WellbeingSurvey:
        fields = payload.model_dump(exclude={"worker_id", "week_date"})
        db_obj = await self.get_survey(db, payload.worker_id, payload.week_date)
        if db_obj:
            for key, value in fields.items():
                setattr(db_obj, key, value)
        else:
            db_obj = WellbeingSurvey(worker_id=payload.worker_id, week_date=payload.week_date, **fields)
            db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    # ── Help signals ──────────────────────────────────────────

    async def get_help_signal(
        self, db: AsyncSession, signal_id: int
    ) -> Optional[HelpSignal]:
        r = await db.execute(select(HelpSignal).where(HelpSignal.id == signal_id))
        return r.scalar_one_or_none()

    async def get_help_signals(
        self, db: AsyncSession, worker_id: Optional[int] = None
    ) -> List[HelpSignal]:
        query = select(HelpSignal).order_by(HelpSignal.timestamp.desc())
        if worker_id is not None:
            query = query.where(HelpSignal.worker_id == worker_id)
        r = await db.execute(query)
        return r.scalars().all()

    async def create_help_signal(
        self, db: AsyncSession, worker_id: int, message: str
    ) -> HelpSignal:
        db_obj = HelpSignal(
            worker_id=worker_id,
            message=message,
            timestamp=datetime.now(timezone.utc),
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def mark_read(self, db: AsyncSession, signal: HelpSignal) -> HelpSignal:
        if not signal.read_by_leader:
            signal.read_by_leader = True
            signal.read_at = datetime.now(timezone.utc)
            await db.commit()
            await db.refresh(signal)
        return signal
