# modules/burnout/repository.py
"""
Accès DB pour le ledger de dette burnout.

Toute mutation passe par apply_delta() :
    1. SELECT … FOR UPDATE sur la ligne du worker (création si absente)
    2. calcul via engine/burnout/debt.apply_delta (borne + tendance)
    3. upsert de l'entrée datée du jour dans la même transaction
Deux deltas concurrents pour un même worker sont donc sérialisés.

Première écriture : la ligne n'existe pas encore, le verrou ne couvre rien.
Si deux requêtes la créent en même temps, la contrainte UNIQUE(worker_id)
rejette la seconde (IntegrityError) : rollback, puis une seule relecture
verrouillée de la ligne désormais existante.
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.engine.burnout import debt as debt_engine
from app.shared.enums import DebtTrend
from app.shared.models import BurnoutDebtScore, BurnoutDebtEntry

logger = logging.getLogger(__name__)


class BurnoutDebtRepository:

    async def get_debt(
        self, db: AsyncSession, worker_id: int
    ) -> Optional[BurnoutDebtScore]:
        r = await db.execute(
            select(BurnoutDebtScore).where(BurnoutDebtScore.worker_id == worker_id)
        )
        return r.scalar_one_or_none()

    async def _get_for_update(
        self, db: AsyncSession, worker_id: int
    ) -> Optional[BurnoutDebtScore]:
        r = await db.execute(
            select(BurnoutDebtScore)
            .where(BurnoutDebtScore.worker_id == worker_id)
            .with_for_update()
        )
        return r.scalar_one_or_none()

    async def apply_delta(
        self,
        db: AsyncSession,
        worker_id: int,
        delta: int,
        day: date,
        once_per_day: bool = False,
    ) -> BurnoutDebtScore:
        """
        Applique delta à la dette du worker et écrit l'entrée de `day`.

        Args:
            once_per_day: solde de la journée par la politique quotidienne.
                          Refusé (ValueError "ALREADY_SETTLED") si l'entrée de `day`
                          est déjà marquée soldée — vérifié sous le verrou.
                          Les deltas manuels ne marquent jamais la journée.
        """
        try:
            return await self._apply_locked(db, worker_id, delta, day, once_per_day)
        except IntegrityError:
            await db.rollback()
            logger.info("Ledger de worker=%s créé en concurrence : relecture verrouillée", worker_id)
            return await self._apply_locked(db, worker_id, delta, day, once_per_day)

    async def _apply_locked(
        self,
        db: AsyncSession,
        worker_id: int,
        delta: int,
        day: date,
        once_per_day: bool,
    ) -> BurnoutDebtScore:
        record = await self._get_for_update(db, worker_id)
        if record is None:
            record = BurnoutDebtScore(
                worker_id=worker_id,
                current_debt=debt_engine.DEBT_MIN,
                trend=DebtTrend.STABLE,
                history=[],
            )
            db.add(record)

        entry = next((e for e in record.history if e.date == day), None)
        if once_per_day and entry is not None and entry.settled:
            await db.rollback()
            raise ValueError("ALREADY_SETTLED")

        new_debt, trend = debt_engine.apply_delta(record.current_debt, delta)
        record.current_debt = new_debt
        record.trend = trend
        record.last_updated = datetime.now(timezone.utc)

        if entry is not None:
            entry.score = new_debt
            entry.settled = bool(entry.settled) or once_per_day
        else:
            record.history.append(BurnoutDebtEntry(date=day, score=new_debt, settled=once_per_day))

        await db.commit()
        return record
