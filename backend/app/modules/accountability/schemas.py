# app/modules/accountability/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import date


class HardStreakOut(BaseModel):
    worker_id: int
    worker_name: str
    count: int
    model_config = ConfigDict(from_attributes=True)


class DayScoreOut(BaseModel):
    date: date
    score: int
    model_config = ConfigDict(from_attributes=True)


class AccountabilityOut(BaseModel):
    leader_id: int
    fairness_score: int = Field(..., ge=0, le=100)
    consecutive_hard_assignments: List[HardStreakOut] = []
    override_count: int
    total_assignments: int
    ignored_recommendations: int
    unresolved_alerts: int
    history: List[DayScoreOut] = []       # 14 jours, du plus ancien au plus récent
    model_config = ConfigDict(from_attributes=True)
