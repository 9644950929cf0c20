# app/shared/models/Activity.py
"""
Signaux d'activité saisis par le worker.

WorkLog    : une entrée par worker et par jour calendaire (upsert sur conflit)
HelpSignal : événement immuable « je suis débordé » — seul l'accusé de lecture évolue

Ces lignes alimentent le moteur burnout (engine/burnout/risk.py) en lecture seule.
"""
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, Date,
    DateTime, JSON, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class WorkLog(Base):
    __tablename__ = "work_logs"

    id        = Column(Integer, primary_key=True, index=True)
    worker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date      = Column(Date, nullable=False, index=True)

    screen_time_hours       = Column(Float, nullable=False, default=0.0)
    tasks_completed         = Column(Integer, nullable=False, default=0)
    task_descriptions       = Column(JSON, nullable=False, default=list)
    breaks_taken            = Column(Integer, nullable=False, default=0)
    break_duration_minutes  = Column(Integer, nullable=False, default=0)
    session_start_time      = Column(String, nullable=True)   # "09:00"
    session_end_time        = Column(String, nullable=True)
    longest_session_minutes = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("worker_id", "date", name="uq_work_log_worker_date"),
    )

    worker = relationship("User", back_populates="work_logs")

    def __repr__(self):
        return f"<WorkLog id={self.id} worker={self.worker_id} date={self.date} screen={self.screen_time_hours}h>"


class HelpSignal(Base):
    __tablename__ = "help_signals"

    id        = Column(Integer, primary_key=True, index=True)
    worker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message   = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    read_by_leader = Column(Boolean, default=False, nullable=False)
    read_at        = Column(DateTime(timezone=True), nullable=True)

    worker = relationship("User", back_populates="help_signals")

    def __repr__(self):
        return f"<HelpSignal id={self.id} worker={self.worker_id} read={self.read_by_leader}>"
