# modules/assignment/router.py
"""
Endpoints d'assignation quotidienne (leader → worker).
"""
from fastapi import APIRouter, HTTPException, status
from typing import List, Optional

from app.shared.deps import DbDep, DaysDep
from app.modules.assignment.service import AssignmentService
from app.modules.assignment.schemas import AssignmentIn, AssignmentOut

router = APIRouter(prefix="/assignments", tags=["Assignments"])
service = AssignmentService()


@router.post(
    "",
    response_model=AssignmentOut,
    status_code=status.HTTP_201_CREATED,
    summary="Assigner la tâche du jour",
    description=(
        "Crée ou remplace l'assignation du worker pour la date donnée. "
        "Un override (difficulté différente de la recommandation) exige une raison."
    ),
)
async def create_assignment(payload: AssignmentIn, db: DbDep):
    try:
        return await service.create_assignment(db, payload)
    except LookupError as e:
        detail = "Leader introuvable." if str(e) == "LEADER_NOT_FOUND" else "Worker introuvable."
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail)
    except ValueError as e:
        code = str(e)
        if code == "OVERRIDE_REASON_REQUIRED":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Une raison est requise pour un override de la recommandation.",
            )
        if code == "NOT_A_LEADER":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Seul un leader peut assigner une tâche.",
            )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=code)


@router.get(
    "",
    response_model=List[AssignmentOut],
    summary="Assignations récentes (d'un worker ou de toute l'équipe)",
)
async def list_assignments(db: DbDep, days: DaysDep, worker_id: Optional[int] = None):
    return await service.list_assignments(db, worker_id=worker_id, days=days)
