# modules/accountability/router.py
"""
Endpoint de l'indice d'équité du leader.
"""
from fastapi import APIRouter, HTTPException, status

from app.shared.deps import DbDep
from app.modules.accountability.service import AccountabilityService
from app.modules.accountability.schemas import AccountabilityOut

router = APIRouter(prefix="/accountability", tags=["Accountability"])
service = AccountabilityService()


@router.get(
    "/{leader_id}",
    response_model=AccountabilityOut,
    summary="Indice d'accountability d'un leader",
    description=(
        "Fairness score, séries hard consécutives par worker, overrides, "
        "recommandations ignorées, alertes non résolues et historique 14 jours."
    ),
)
async def get_accountability(leader_id: int, db: DbDep):
    try:
        return await service.compute_accountability(db, leader_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Leader introuvable.")
    except ValueError as e:
        if str(e) == "NOT_A_LEADER":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cet utilisateur n'est pas un leader.",
            )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
