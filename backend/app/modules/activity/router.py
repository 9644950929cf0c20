# modules/activity/router.py
"""
Endpoints de saisie worker : work logs, surveys hebdomadaires, help signals.
Un seul créneau par jour (work log) / par semaine (survey) : le POST remplace.
"""
from fastapi import APIRouter, HTTPException, status
from typing import List, Optional

from app.shared.deps import DbDep, DaysDep
from app.modules.activity.service import ActivityService
from app.modules.activity.schemas import (
    WorkLogIn,
    WorkLogOut,
    SurveyIn,
    SurveyOut,
    HelpSignalIn,
    HelpSignalOut,
)

router = APIRouter(prefix="/activity", tags=["Activity"])
service = ActivityService()

WORKER_NOT_FOUND = "Worker introuvable."


# ── Work logs ─────────────────────────────────────────────

@router.post(
    "/worklogs",
    response_model=WorkLogOut,
    status_code=status.HTTP_201_CREATED,
    summary="Enregistrer le work log du jour",
)
async def submit_work_log(payload: WorkLogIn, db: DbDep):
    try:
        return await service.submit_work_log(db, payload)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, WORKER_NOT_FOUND)


@router.get(
    "/worklogs",
    response_model=List[WorkLogOut],
    summary="Work logs récents (d'un worker ou de toute l'équipe)",
)
async def list_work_logs(db: DbDep, days: DaysDep, worker_id: Optional[int] = None):
    return await service.list_work_logs(db, worker_id=worker_id, days=days)


# ── Surveys ───────────────────────────────────────────────

@router.post(
    "/surveys",
    response_model=SurveyOut,
    status_code=status.HTTP_201_CREATED,
    summary="Soumettre le survey de la semaine",
)
async def submit_survey(payload: SurveyIn, db: DbDep):
    try:
        return await service.submit_survey(db, payload)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, WORKER_NOT_FOUND)


@router.get(
    "/surveys",
    response_model=List[SurveyOut],
    summary="Surveys d'un worker (plus récents d'abord)",
)
async def list_surveys(worker_id: int, db: DbDep):
    return await service.list_surveys(db, worker_id)


# ── Help signals ──────────────────────────────────────────

@router.post(
    "/help-signals",
    response_model=HelpSignalOut,
    status_code=status.HTTP_201_CREATED,
    summary="Envoyer un help signal",
    description="Crée aussi une alerte help-signal (high-risk) pour le leader.",
)
async def send_help_signal(payload: HelpSignalIn, db: DbDep):
    try:
        return await service.send_help_signal(db, payload.worker_id, payload.message)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, WORKER_NOT_FOUND)


@router.get(
    "/help-signals",
    response_model=List[HelpSignalOut],
    summary="Help signals (plus récents d'abord)",
)
async def list_help_signals(db: DbDep, worker_id: Optional[int] = None):
    return await service.list_help_signals(db, worker_id=worker_id)


@router.patch(
    "/help-signals/{signal_id}/read",
    response_model=HelpSignalOut,
    summary="Marquer un help signal comme lu",
)
async def mark_help_signal_read(signal_id: int, db: DbDep):
    try:
        return await service.mark_help_signal_read(db, signal_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Help signal introuvable.")
