# app/modules/assignment/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime
from app.shared.enums import Difficulty


class AssignmentIn(BaseModel):
    worker_id: int
    assigned_by_id: int
    date: date
    difficulty: Difficulty
    task_title: str = Field(..., min_length=1)
    task_description: str = ""
    recommended_difficulty: Optional[Difficulty] = None
    was_override: bool = False
    override_reason: Optional[str] = None     # Requis si was_override


class AssignmentOut(BaseModel):
    id: int
    worker_id: int
    assigned_by_id: int
    date: date
    difficulty: Difficulty
    task_title: str
    task_description: str = ""
    recommended_difficulty: Optional[Difficulty] = None
    was_override: bool = False
    override_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
