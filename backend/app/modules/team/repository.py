# modules/team/repository.py
"""
Accès DB pour l'annuaire des utilisateurs (workers, leaders).
Lecture seule : la création passe par le seed.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.enums import UserRole
from app.shared.models import User


class UserRepository:

    async def get_user(self, db: AsyncSession, user_id: int) -> Optional[User]:
        r = await db.execute(select(User).where(User.id == user_id))
        return r.scalar_one_or_none()

    async def get_users(
        self, db: AsyncSession, role: Optional[UserRole] = None
    ) -> List[User]:
        query = select(User).order_by(User.id)
        if role is not None:
            query = query.where(User.role == role)
        r = await db.execute(query)
        return r.scalars().all()
