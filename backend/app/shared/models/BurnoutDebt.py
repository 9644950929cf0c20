# app/shared/models/BurnoutDebt.py
"""
Ledger de dette burnout — un agrégat par worker.

BurnoutDebtScore : état courant (current_debt ∈ [0, 100], trend, last_updated)
BurnoutDebtEntry : historique daté, une ligne par (score, date)
                   — une seconde écriture le même jour écrase la valeur.
                   settled : la journée a été soldée par la politique quotidienne
                   (settle_day), au plus une fois ; les deltas manuels ne le posent pas.

Toute mutation passe par BurnoutDebtRepository.apply_delta() (verrou de ligne).
"""
from sqlalchemy import (
    Column, Integer, Boolean, Date, DateTime, ForeignKey,
    UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import DebtTrend
from app.shared.models.User import enum_values


class BurnoutDebtScore(Base):
    __tablename__ = "burnout_debt_scores"

    id           = Column(Integer, primary_key=True, index=True)
    worker_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    current_debt = Column(Integer, nullable=False, default=0)
    trend        = Column(
        SAEnum(DebtTrend, name="debttrend", values_callable=enum_values),
        default=DebtTrend.STABLE, nullable=False,
    )
    last_updated = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    worker  = relationship("User", back_populates="burnout_debt")
    history = relationship(
        "BurnoutDebtEntry", back_populates="debt_score",
        cascade="all, delete-orphan",
        order_by="BurnoutDebtEntry.date",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<BurnoutDebtScore worker={self.worker_id} debt={self.current_debt} trend={self.trend}>"


class BurnoutDebtEntry(Base):
    __tablename__ = "burnout_debt_entries"

    id       = Column(Integer, primary_key=True, index=True)
    score_id = Column(Integer, ForeignKey("burnout_debt_scores.id", ondelete="CASCADE"), nullable=False, index=True)
    date     = Column(Date, nullable=False)
    score    = Column(Integer, nullable=False)
    settled  = Column(Boolean, nullable=False, default=False)   # Soldée par la politique quotidienne

    __table_args__ = (
        UniqueConstraint("score_id", "date", name="uq_debt_entry_score_date"),
    )

    debt_score = relationship("BurnoutDebtScore", back_populates="history")

    def __repr__(self):
        return f"<BurnoutDebtEntry date={self.date} score={self.score}>"
