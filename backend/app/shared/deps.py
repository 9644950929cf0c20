# app/shared/deps.py
"""
Dépendances FastAPI réutilisables dans tous les routers.
Injectées via Depends() — jamais appelées directement.

L'authentification est hors périmètre : le rôle est vérifié par les services
à partir des identifiants passés dans le chemin ou le payload.
"""
from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db


async def history_days(
    days: int = Query(settings.DEFAULT_HISTORY_DAYS, ge=1, le=365, description="Fenêtre en jours"),
) -> int:
    """Fenêtre de lecture des listes datées (work logs, assignations)."""
    return days


# ── Type aliases pour les routers ─────────────────────────
DbDep   = Annotated[AsyncSession, Depends(get_db)]
DaysDep = Annotated[int, Depends(history_days)]
