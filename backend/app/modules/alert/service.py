# modules/alert/service.py
"""
Gestion des alertes leader.

Machine à états :
    pending ──acknowledge──▶ acknowledged ──resolve──▶ resolved
    pending ──────────────resolve─────────────────────▶ resolved
Toute autre transition → ValueError("INVALID_TRANSITION").
La résolution exige une explication ET une action corrective non vides.

Déduplication (record_drafts) :
    une alerte brouillon du moteur est ignorée si une alerte PENDING
    du même (worker_id, type) existe déjà.
    Deux clôtures concurrentes peuvent passer has_pending ensemble : l'index
    unique partiel uq_alert_pending_worker_type rejette la seconde insertion,
    qui est annulée et ignorée comme un doublon.
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.engine.burnout.risk import DraftAlert
from app.modules.alert.repository import AlertRepository
from app.shared.enums import AlertAction, AlertStatus, AlertType, RiskLevel
from app.shared.models import Alert

logger = logging.getLogger(__name__)

alert_repo = AlertRepository()


class AlertService:

    async def list_alerts(
        self,
        db: AsyncSession,
        worker_id: Optional[int] = None,
        status: Optional[AlertStatus] = None,
    ) -> List[Alert]:
        return await alert_repo.list_alerts(db, worker_id=worker_id, status=status)

    async def count_pending(self, db: AsyncSession, worker_id: Optional[int] = None) -> int:
        return await alert_repo.count_pending(db, worker_id=worker_id)

    # ── Enregistrement ────────────────────────────────────────

    async def raise_alert(
        self,
        db: AsyncSession,
        worker_id: int,
        alert_type: AlertType,
        severity: RiskLevel,
        message: str,
        details: str = "",
    ) -> Alert:
        """Création directe, sans déduplication (ex. chaque help signal compte)."""
        alert = await alert_repo.create_alert(
            db, worker_id, alert_type, severity, message, details
        )
        logger.info("Alerte %s créée pour worker=%s (severity=%s)", alert_type.value, worker_id, severity.value)
        return alert

    async def record_drafts(
        self, db: AsyncSession, drafts: Iterable[DraftAlert]
    ) -> List[Alert]:
        """Persiste les brouillons du moteur, sauf doublons pending. Retourne les créées."""
        created = []
        for draft in drafts:
            if await alert_repo.has_pending(db, draft.worker_id, draft.type):
                logger.debug(
                    "Alerte %s déjà pending pour worker=%s, ignorée",
                    draft.type.value, draft.worker_id,
                )
                continue
            try:
                alert = await self.raise_alert(
                    db, draft.worker_id, draft.type, draft.severity, draft.message, draft.details
                )
            except IntegrityError:
                await db.rollback()
                logger.info(
                    "Alerte %s créée en parallèle pour worker=%s, ignorée",
                    draft.type.value, draft.worker_id,
                )
                continue
            created.append(alert)
        return created

    # ── Transitions leader ────────────────────────────────────

    async def update(
        self,
        db: AsyncSession,
        alert_id: int,
        action: AlertAction,
        explanation: Optional[str] = None,
        corrective_action: Optional[str] = None,
    ) -> Alert:
        if action == AlertAction.ACKNOWLEDGE:
            return await self.acknowledge(db, alert_id)
        return await self.resolve(db, alert_id, explanation, corrective_action)

    async def acknowledge(self, db: AsyncSession, alert_id: int) -> Alert:
        alert = await self._get_or_raise(db, alert_id)
        if alert.status != AlertStatus.PENDING:
            raise ValueError("INVALID_TRANSITION")

        alert.status = AlertStatus.ACKNOWLEDGED
        alert.acknowledged_at = datetime.now(timezone.utc)
        return await alert_repo.save(db, alert)

    async def resolve(
        self,
        db: AsyncSession,
        alert_id: int,
        explanation: Optional[str],
        corrective_action: Optional[str],
    ) -> Alert:
        explanation = (explanation or "").strip()
        corrective_action = (corrective_action or "").strip()
        if not explanation or not corrective_action:
            raise ValueError("RESOLUTION_REQUIRED")

        alert = await self._get_or_raise(db, alert_id)
        if alert.status == AlertStatus.RESOLVED:
            raise ValueError("INVALID_TRANSITION")

        alert.status = AlertStatus.RESOLVED
        alert.resolved_at = datetime.now(timezone.utc)
        alert.leader_explanation = explanation
        alert.corrective_action = corrective_action
        logger.info("Alerte %s résolue (worker=%s)", alert_id, alert.worker_id)
        return await alert_repo.save(db, alert)

    # ── Internals ─────────────────────────────────────────────

    async def _get_or_raise(self, db: AsyncSession, alert_id: int) -> Alert:
        alert = await alert_repo.get_alert(db, alert_id)
        if not alert:
            raise LookupError("ALERT_NOT_FOUND")
        return alert
