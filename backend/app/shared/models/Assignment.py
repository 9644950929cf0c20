# app/shared/models/Assignment.py
"""
Tâche quotidienne assignée par un leader (modèle une tâche / jour / worker).

recommended_difficulty : ce que le moteur proposait au moment de l'assignation
was_override           : le leader a dévié ET l'a déclaré (override_reason obligatoire)
Une déviation sans was_override est une « recommandation ignorée » (accountability).
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, Date, DateTime,
    ForeignKey, UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import Difficulty
from app.shared.models.User import enum_values


# Type partagé par difficulty et recommended_difficulty (un seul CREATE TYPE)
DifficultyType = SAEnum(Difficulty, name="difficulty", values_callable=enum_values)


class Assignment(Base):
    __tablename__ = "assignments"

    id             = Column(Integer, primary_key=True, index=True)
    worker_id      = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date           = Column(Date, nullable=False, index=True)

    difficulty       = Column(DifficultyType, nullable=False)
    task_title       = Column(String, nullable=False)
    task_description = Column(String, nullable=False, default="")

    recommended_difficulty = Column(DifficultyType, nullable=True)
    was_override    = Column(Boolean, nullable=False, default=False)
    override_reason = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("worker_id", "date", name="uq_assignment_worker_date"),
    )

    worker      = relationship("User", foreign_keys=[worker_id])
    assigned_by = relationship("User", foreign_keys=[assigned_by_id])

    def __repr__(self):
        return f"<Assignment id={self.id} worker={self.worker_id} date={self.date} {self.difficulty}>"
