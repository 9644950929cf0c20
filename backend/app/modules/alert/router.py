# modules/alert/router.py
"""
Endpoints de traitement des alertes par le leader.
Couvre : liste filtrée, acknowledge, resolve.
"""
from fastapi import APIRouter, HTTPException, Query, status
from typing import List, Optional

from app.shared.deps import DbDep
from app.shared.enums import AlertStatus
from app.modules.alert.service import AlertService
from app.modules.alert.schemas import AlertOut, AlertUpdateIn

router = APIRouter(prefix="/alerts", tags=["Alerts"])
service = AlertService()


@router.get(
    "",
    response_model=List[AlertOut],
    summary="Alertes (plus récentes d'abord)",
)
async def list_alerts(
    db: DbDep,
    worker_id: Optional[int] = None,
    alert_status: Optional[AlertStatus] = Query(None, alias="status"),
):
    return await service.list_alerts(db, worker_id=worker_id, status=alert_status)


@router.patch(
    "/{alert_id}",
    response_model=AlertOut,
    summary="Acknowledge ou resolve une alerte",
    description=(
        "action=acknowledge : pending → acknowledged. "
        "action=resolve : pending|acknowledged → resolved, "
        "explanation et corrective_action obligatoires."
    ),
)
async def update_alert(alert_id: int, payload: AlertUpdateIn, db: DbDep):
    try:
        return await service.update(
            db,
            alert_id,
            action=payload.action,
            explanation=payload.explanation,
            corrective_action=payload.corrective_action,
        )
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Alerte introuvable.")
    except ValueError as e:
        code = str(e)
        if code == "INVALID_TRANSITION":
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Transition impossible depuis le statut actuel de l'alerte.",
            )
        if code == "RESOLUTION_REQUIRED":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Une explication et une action corrective sont requises.",
            )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=code)
