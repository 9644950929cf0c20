# app/shared/models/User.py
"""
Annuaire des utilisateurs.

Un seul modèle pour les deux rôles :
- worker : journalise son activité, répond aux surveys, envoie des help signals
- leader : assigne une tâche par jour et par worker, traite les alertes

L'authentification est hors périmètre — le rôle suffit aux contrôles d'accès métier.
"""
from sqlalchemy import Column, Integer, String, DateTime, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import UserRole


def enum_values(enum_cls):
    """Persiste les valeurs ("high-risk") plutôt que les noms ("HIGH_RISK")."""
    return [member.value for member in enum_cls]


class User(Base):
    __tablename__ = "users"

    id    = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name  = Column(String, nullable=False)

    role = Column(
        SAEnum(UserRole, name="userrole", values_callable=enum_values),
        default=UserRole.WORKER, nullable=False, index=True,
    )
    team_id    = Column(String, nullable=True, index=True)
    avatar_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # ── Relations ────────────────────────────────────────────
    work_logs = relationship(
        "WorkLog", back_populates="worker",
        cascade="all, delete-orphan",
    )
    surveys = relationship(
        "WellbeingSurvey", back_populates="worker",
        cascade="all, delete-orphan",
    )
    help_signals = relationship(
        "HelpSignal", back_populates="worker",
        cascade="all, delete-orphan",
    )
    burnout_debt = relationship(
        "BurnoutDebtScore", back_populates="worker",
        uselist=False, cascade="all, delete-orphan",
    )

    # ── Helpers ──────────────────────────────────────────────
    @property
    def is_worker(self) -> bool:
        return self.role == UserRole.WORKER

    @property
    def is_leader(self) -> bool:
        return self.role == UserRole.LEADER

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
