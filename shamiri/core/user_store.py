from typing import Optional
import uuid
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from shamiri.core.database import Database
from shamiri.models.journal import User, utc_now


class UserStore:
    """Maps identity-provider subjects to internal user records."""

    def __init__(self, db: Database):
        self.db = db

    async def get_by_auth_id(self, auth_user_id: str) -> Optional[User]:
        async with self.db.engine.connect() as conn:
            result = await conn.execute(
                select(self.db.users).where(self.db.users.c.auth_user_id == auth_user_id)
            )
            row = result.first()
            return User(**row._mapping) if row else None

    async def get_or_create(self, auth_user_id: str) -> User:
        """Return the user for this subject, creating the record on first sight."""
        existing = await self.get_by_auth_id(auth_user_id)
        if existing:
            return existing

        user = User(id=str(uuid.uuid4()), auth_user_id=auth_user_id, created_at=utc_now())
        try:
            async with self.db.engine.begin() as conn:
                await conn.execute(self.db.users.insert().values(**user.model_dump()))
        except IntegrityError:
            # Another request registered the same subject first
            existing = await self.get_by_auth_id(auth_user_id)
            if existing is None:
                raise
            return existing
        return user
