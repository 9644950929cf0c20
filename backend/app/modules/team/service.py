# modules/team/service.py
"""
Annuaire : résolution des workers et leaders par id.

Les autres modules passent par require_worker() / require_leader()
pour obtenir une erreur homogène quand l'id est inconnu ou du mauvais rôle.
"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.team.repository import UserRepository
from app.shared.enums import UserRole
from app.shared.models import User

user_repo = UserRepository()


class TeamService:

    async def list_members(
        self, db: AsyncSession, role: Optional[UserRole] = None
    ) -> List[User]:
        return await user_repo.get_users(db, role=role)

    async def get_member(self, db: AsyncSession, user_id: int) -> User:
        user = await user_repo.get_user(db, user_id)
        if not user:
            raise LookupError("USER_NOT_FOUND")
        return user

    async def require_worker(self, db: AsyncSession, worker_id: int) -> User:
        user = await user_repo.get_user(db, worker_id)
        if not user or user.role != UserRole.WORKER:
            raise LookupError("WORKER_NOT_FOUND")
        return user

    async def require_leader(self, db: AsyncSession, leader_id: int) -> User:
        user = await user_repo.get_user(db, leader_id)
        if not user:
            raise LookupError("LEADER_NOT_FOUND")
        if user.role != UserRole.LEADER:
            raise ValueError("NOT_A_LEADER")
        return user

