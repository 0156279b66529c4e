"""Resolves authenticated principals to user records."""

from typing import Optional

from shamiri.core.database import Database
from shamiri.core.user_store import UserStore
from shamiri.errors import AuthenticationError
from shamiri.models.journal import User
from server.logging_config import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Database):
        self.store = UserStore(db)

    async def resolve(self, auth_user_id: Optional[str]) -> User:
        """
        Return the user behind an authenticated principal, registering it on
        first sight.

        Raises:
            AuthenticationError: no principal was supplied
        """
        if not auth_user_id or not auth_user_id.strip():
            raise AuthenticationError()

        user = await self.store.get_or_create(auth_user_id.strip())
        logger.debug(f"Resolved principal {auth_user_id} to user {user.id}")
        return user
