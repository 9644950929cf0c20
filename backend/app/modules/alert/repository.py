# modules/alert/repository.py
"""
Accès DB pour les alertes leader.
"""
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.enums import AlertStatus, AlertType, RiskLevel
from app.shared.models import Alert


class AlertRepository:

    async def get_alert(self, db: AsyncSession, alert_id: int) -> Optional[Alert]:
        r = await db.execute(select(Alert).where(Alert.id == alert_id))
        return r.scalar_one_or_none()

    async def list_alerts(
        self,
        db: AsyncSession,
        worker_id: Optional[int] = None,
        status: Optional[AlertStatus] = None,
    ) -> List[Alert]:
        query = select(Alert).order_by(Alert.created_at.desc(), Alert.id.desc())
        if worker_id is not None:
            query = query.where(Alert.worker_id == worker_id)
        if status is not None:
            query = query.where(Alert.status == status)
        r = await db.execute(query)
        return r.scalars().all()

    async def has_pending(
        self, db: AsyncSession, worker_id: int, alert_type: AlertType
    ) -> bool:
        r = await db.execute(
            select(Alert.id).where(
                Alert.worker_id == worker_id,
                Alert.type == alert_type,
                Alert.status == AlertStatus.PENDING,
            ).limit(1)
        )
        return r.scalar_one_or_none() is not None

    async def count_pending(
        self, db: AsyncSession, worker_id: Optional[int] = None
    ) -> int:
        query = select(func.count(Alert.id)).where(Alert.status == AlertStatus.PENDING)
        if worker_id is not None:
            query = query.where(Alert.worker_id == worker_id)
        r = await db.execute(query)
        return r.scalar_one()

    async def create_alert(
        self,
        db: AsyncSession,
        worker_id: int,
        alert_type: AlertType,
        severity: RiskLevel,
        message: str,
        details: str = "",
    ) -> Alert:
        db_obj = Alert(
            worker_id=worker_id,
            type=alert_type,
            severity=severity,
            status=AlertStatus.PENDING,
            message=message,
            details=details,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def save(self, db: AsyncSession, alert: Alert) -> Alert:
        await db.commit()
        await db.refresh(alert)
        return alert
