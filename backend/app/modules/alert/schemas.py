# app/modules/alert/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from app.shared.enums import AlertAction, AlertStatus, AlertType, RiskLevel


class AlertOut(BaseModel):
    id: int
    worker_id: int
    type: AlertType
    severity: RiskLevel
    status: AlertStatus
    message: str
    details: str = ""
    created_at: Optional[datetime] = None
    acknowledged_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    leader_explanation: Optional[str] = None
    corrective_action: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class AlertUpdateIn(BaseModel):
    action: AlertAction
    explanation: Optional[str] = None        # Requis pour resolve
    corrective_action: Optional[str] = None  # Requis pour resolve
