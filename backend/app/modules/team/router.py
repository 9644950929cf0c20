# modules/team/router.py
"""
Endpoints de l'annuaire d'équipe.
Règle : zéro db.execute ici. Tout passe par le service.
"""
from fastapi import APIRouter, HTTPException, status
from typing import List, Optional

from app.shared.deps import DbDep
from app.shared.enums import UserRole
from app.modules.team.service import TeamService
from app.modules.team.schemas import UserOut

router = APIRouter(prefix="/team", tags=["Team"])
service = TeamService()


@router.get(
    "/members",
    response_model=List[UserOut],
    summary="Membres de l'équipe",
)
async def list_members(db: DbDep, role: Optional[UserRole] = None):
    """Tous les utilisateurs, filtrables par rôle (worker / leader)."""
    return await service.list_members(db, role=role)


@router.get(
    "/members/{user_id}",
    response_model=UserOut,
    summary="Un membre",
)
async def get_member(user_id: int, db: DbDep):
    try:
        return await service.get_member(db, user_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Utilisateur introuvable.")
