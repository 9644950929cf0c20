# app/modules/team/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from app.shared.enums import UserRole


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    team_id: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
