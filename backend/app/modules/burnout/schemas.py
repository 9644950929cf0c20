# app/modules/burnout/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date, datetime
from app.shared.enums import (
    AlertStatus, AlertType, Confidence, DebtTrend,
    Difficulty, RecommendationTier, RiskLevel,
)
from app.modules.alert.schemas import AlertOut


# ── Risque ─────────────────────────────────────────────────

class RiskFactorsOut(BaseModel):
    screen_time_excess: bool
    consecutive_hard_days: int
    long_sessions_no_breaks: bool
    high_stress_score: bool
    low_energy_score: bool
    poor_work_life_balance: bool
    help_signal_sent: bool
    high_burnout_debt: bool
    avg_screen_time_hours: float = 0.0
    model_config = ConfigDict(from_attributes=True)


class DraftAlertOut(BaseModel):
    worker_id: int
    type: AlertType
    severity: RiskLevel
    message: str
    details: str
    status: AlertStatus
    model_config = ConfigDict(from_attributes=True)


class RiskAssessmentOut(BaseModel):
    worker_id: int
    risk_level: RiskLevel
    score: int = Field(..., ge=0, le=100)
    factors: RiskFactorsOut
    draft_alerts: List[DraftAlertOut] = []
    model_config = ConfigDict(from_attributes=True)


class EvaluationOut(BaseModel):
    assessment: RiskAssessmentOut
    recorded_alerts: List[AlertOut] = []    # Brouillons persistés (doublons exclus)


# ── Recommandation ─────────────────────────────────────────

class RecommendationOut(BaseModel):
    worker_id: int
    recommended_difficulty: Difficulty
    reasoning: str
    factors: List[str] = []
    confidence: Confidence
    tier: RecommendationTier
    rule: str
    model_config = ConfigDict(from_attributes=True)


# ── Santé worker ───────────────────────────────────────────

class WorkerHealthOut(BaseModel):
    worker_id: int
    name: str
    risk_level: RiskLevel
    risk_score: int
    burnout_debt: int
    avg_stress: float
    avg_energy: float
    recent_difficulties: List[Difficulty] = []
    active_alerts: int
    last_help_signal: Optional[datetime] = None
    factors: RiskFactorsOut


# ── Dette ──────────────────────────────────────────────────

class DebtEntryOut(BaseModel):
    date: date
    score: int
    settled: bool = False
    model_config = ConfigDict(from_attributes=True)


class DebtOut(BaseModel):
    worker_id: int
    current_debt: int = Field(..., ge=0, le=100)
    trend: DebtTrend
    last_updated: Optional[datetime] = None
    history: List[DebtEntryOut] = []
    model_config = ConfigDict(from_attributes=True)


class DebtDeltaIn(BaseModel):
    delta: int = Field(..., ge=-100, le=100)
    day: Optional[date] = None      # Défaut : aujourd'hui (UTC)


class DebtSettleIn(BaseModel):
    day: date
