# app/shared/models/Survey.py
"""
Survey hebdomadaire de bien-être — une réponse par worker et par semaine.

week_date : date représentative de la semaine (le vendredi côté front).
Échelles 1-5 validées par le schema pydantic, pas re-validées par le moteur.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class WellbeingSurvey(Base):
    __tablename__ = "surveys"

    id        = Column(Integer, primary_key=True, index=True)
    worker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_date = Column(Date, nullable=False, index=True)

    stress_level      = Column(Integer, nullable=False)   # 1 à 5
    energy_level      = Column(Integer, nullable=False)   # 1 à 5
    work_life_balance = Column(Integer, nullable=False)   # 1 à 5
    notes             = Column(String, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("worker_id", "week_date", name="uq_survey_worker_week"),
    )

    worker = relationship("User", back_populates="surveys")

    def __repr__(self):
        return f"<WellbeingSurvey id={self.id} worker={self.worker_id} week={self.week_date} stress={self.stress_level}>"
