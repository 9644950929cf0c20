# modules/assignment/repository.py
"""
Accès DB pour les assignations quotidiennes (une par worker et par jour).
"""
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.models import Assignment


class AssignmentRepository:

    async def get_assignment(
        self, db: AsyncSession, worker_id: int, day: date
    ) -> Optional[Assignment]:
        r = await db.execute(
            select(Assignment).where(
                Assignment.worker_id == worker_id,
                Assignment.date == day,
            )
        )
        return r.scalar_one_or_none()

    async def get_assignments(
        self,
        db: AsyncSession,
        worker_id: Optional[int] = None,
        since: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Assignment]:
        """Plus récentes d'abord. worker_id=None : toute l'équipe."""
        query = select(Assignment).order_by(Assignment.date.desc(), Assignment.worker_id)
        if worker_id is not None:
            query = query.where(Assignment.worker_id == worker_id)
        if since is not None:
            query = query.where(Assignment.date >= since)
        if limit is not None:
            query = query.limit(limit)
        r = await db.execute(query)
        return r.scalars().all()

    async def get_assignments_by_leader(
        self, db: AsyncSession, leader_id: int
    ) -> List[Assignment]:
        r = await db.execute(
            select(Assignment)
            .where(Assignment.assigned_by_id == leader_id)
            .order_by(Assignment.date.desc())
        )
        return r.scalars().all()

    async def upsert_assignment(self, db: AsyncSession, payload) -> Assignment:
        fields = payload.model_dump(exclude={"worker_id", "date"})
        db_obj = await self.get_assignment(db, payload.worker_id, payload.date)
        if db_obj:
            for key, value in fields.items():
                setattr(db_obj, key, value)
        else:
            db_obj = Assignment(worker_id=payload.worker_id, date=payload.date, **fields)
            db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj
