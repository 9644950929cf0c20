# modules/burnout/router.py
"""
Endpoints du moteur burnout.
Couvre : risque, recommandation, santé worker / équipe, ledger de dette.

GET  /risk     : évaluation seule, rien n'est persisté
POST /evaluate : évaluation + enregistrement des alertes brouillons (dédupliquées)
"""
from fastapi import APIRouter, HTTPException, status
from typing import List

from app.shared.deps import DbDep
from app.modules.burnout.service import BurnoutService
from app.modules.burnout.schemas import (
    RiskAssessmentOut,
    EvaluationOut,
    RecommendationOut,
    WorkerHealthOut,
    DebtOut,
    DebtDeltaIn,
    DebtSettleIn,
)

router = APIRouter(prefix="/burnout", tags=["Burnout"])
service = BurnoutService()


def _worker_not_found() -> HTTPException:
    return HTTPException(status.HTTP_404_NOT_FOUND, "Worker introuvable.")


# ── Équipe ────────────────────────────────────────────────

@router.get(
    "/workers",
    response_model=List[WorkerHealthOut],
    summary="Vue santé de tous les workers",
)
async def get_team_health(db: DbDep):
    return await service.get_team_health(db)


# ── Risque & recommandation ───────────────────────────────

@router.get(
    "/workers/{worker_id}/risk",
    response_model=RiskAssessmentOut,
    summary="Score de risque burnout",
)
async def get_risk(worker_id: int, db: DbDep):
    try:
        return await service.evaluate_risk(db, worker_id)
    except LookupError:
        raise _worker_not_found()


@router.post(
    "/workers/{worker_id}/evaluate",
    response_model=EvaluationOut,
    summary="Évaluer et enregistrer les alertes",
    description=(
        "Calcule le risque et persiste les alertes brouillons du moteur. "
        "Une alerte déjà pending du même type pour ce worker n'est pas dupliquée."
    ),
)
async def evaluate_and_record(worker_id: int, db: DbDep):
    try:
        return await service.evaluate_and_record(db, worker_id)
    except LookupError:
        raise _worker_not_found()


@router.get(
    "/workers/{worker_id}/recommendation",
    response_model=RecommendationOut,
    summary="Difficulté recommandée pour aujourd'hui",
)
async def get_recommendation(worker_id: int, db: DbDep):
    try:
        return await service.recommend_workload(db, worker_id)
    except LookupError:
        raise _worker_not_found()


@router.get(
    "/workers/{worker_id}/health",
    response_model=WorkerHealthOut,
    summary="État de santé d'un worker",
)
async def get_worker_health(worker_id: int, db: DbDep):
    try:
        return await service.get_worker_health(db, worker_id)
    except LookupError:
        raise _worker_not_found()


# ── Dette ─────────────────────────────────────────────────

@router.get(
    "/workers/{worker_id}/debt",
    response_model=DebtOut,
    summary="Dette burnout courante et historique",
)
async def get_debt(worker_id: int, db: DbDep):
    try:
        return await service.get_debt(db, worker_id)
    except LookupError:
        raise _worker_not_found()


@router.post(
    "/workers/{worker_id}/debt",
    response_model=DebtOut,
    summary="Appliquer un delta de dette",
    description="Résultat borné à [0, 100]. L'entrée du jour est écrasée si elle existe.",
)
async def apply_debt_delta(worker_id: int, payload: DebtDeltaIn, db: DbDep):
    try:
        return await service.apply_debt_delta(db, worker_id, payload.delta, day=payload.day)
    except LookupError:
        raise _worker_not_found()


@router.post(
    "/workers/{worker_id}/debt/settle",
    response_model=DebtOut,
    summary="Solder une journée selon la politique de référence",
)
async def settle_day(worker_id: int, payload: DebtSettleIn, db: DbDep):
    try:
        return await service.settle_day(db, worker_id, payload.day)
    except LookupError:
        raise _worker_not_found()
    except ValueError as e:
        if str(e) == "ALREADY_SETTLED":
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Cette journée a déjà été soldée.",
            )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
