# app/modules/activity/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date, datetime


# ── Work logs ──────────────────────────────────────────────

class WorkLogIn(BaseModel):
    worker_id: int
    date: date
    screen_time_hours: float = Field(..., ge=0, le=24)
    tasks_completed: int = Field(0, ge=0)
    task_descriptions: List[str] = Field(default_factory=list)
    breaks_taken: int = Field(0, ge=0)
    break_duration_minutes: int = Field(0, ge=0)
    session_start_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")   # "09:00"
    session_end_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    longest_session_minutes: int = Field(0, ge=0)


class WorkLogOut(BaseModel):
    id: int
    worker_id: int
    date: date
    screen_time_hours: float
    tasks_completed: int
    task_descriptions: List[str] = []
    breaks_taken: int
    break_duration_minutes: int = 0
    session_start_time: Optional[str] = None
    session_end_time: Optional[str] = None
    longest_session_minutes: int
    model_config = ConfigDict(from_attributes=True)


# ── Surveys ────────────────────────────────────────────────

class SurveyIn(BaseModel):
    worker_id: int
    week_date: date
    stress_level: int = Field(..., ge=1, le=5)
    energy_level: int = Field(..., ge=1, le=5)
    work_life_balance: int = Field(..., ge=1, le=5)
    notes: str = ""


class SurveyOut(BaseModel):
    id: int
    worker_id: int
    week_date: date
    stress_level: int
    energy_level: int
    work_life_balance: int
    notes: str = ""
    model_config = ConfigDict(from_attributes=True)


# ── Help signals ───────────────────────────────────────────

class HelpSignalIn(BaseModel):
    worker_id: int
    message: str = Field(..., min_length=1, max_length=1000)


class HelpSignalOut(BaseModel):
    id: int
    worker_id: int
    message: str
    timestamp: datetime
    read_by_leader: bool = False
    read_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
