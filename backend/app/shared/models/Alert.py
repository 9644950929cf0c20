# app/shared/models/Alert.py
"""
Alertes à destination du leader.

Cycle de vie : pending → acknowledged → resolved
La résolution exige leader_explanation + corrective_action (non vides),
contrôlée par modules/alert/service.py.

Au plus une alerte PENDING par (worker_id, type), garanti par un index unique
partiel. Les alertes help-signal en sont exclues : chaque signal compte.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, text, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import AlertType, AlertStatus, RiskLevel
from app.shared.models.User import enum_values

PENDING_DEDUP_WHERE = "status = 'pending' AND type <> 'help-signal'"


class Alert(Base):
    __tablename__ = "alerts"

    id        = Column(Integer, primary_key=True, index=True)
    worker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type     = Column(SAEnum(AlertType, name="alerttype", values_callable=enum_values), nullable=False)
    severity = Column(SAEnum(RiskLevel, name="risklevel", values_callable=enum_values), nullable=False)
    status   = Column(
        SAEnum(AlertStatus, name="alertstatus", values_callable=enum_values),
        default=AlertStatus.PENDING, nullable=False, index=True,
    )

    message = Column(String, nullable=False)
    details = Column(String, nullable=False, default="")

    created_at      = Column(DateTime(timezone=True), server_default=func.now())
    acknowledged_at = Column(DateTime(timezone=True), nullable=True)
    resolved_at     = Column(DateTime(timezone=True), nullable=True)

    leader_explanation = Column(String, nullable=True)
    corrective_action  = Column(String, nullable=True)

    __table_args__ = (
        Index(
            "uq_alert_pending_worker_type", "worker_id", "type",
            unique=True,
            postgresql_where=text(PENDING_DEDUP_WHERE),
            sqlite_where=text(PENDING_DEDUP_WHERE),
        ),
    )

    worker = relationship("User")

    def __repr__(self):
        return f"<Alert id={self.id} worker={self.worker_id} type={self.type} status={self.status}>"
