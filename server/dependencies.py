from fastapi import Depends, Request
from typing import Annotated

from shamiri.core.database import Database
from shamiri.models.journal import User
from shamiri.services.user_service import UserService
from server.config import config

def get_db(request: Request) -> Database:
    """Dependency to get the process-wide Database from app.state"""
    return request.app.state.db

async def get_current_user(request: Request, db: Database = Depends(get_db)) -> User:
    """
    Resolve the principal forwarded by the identity gateway.
    Raises AuthenticationError (401) before any other work when it is absent.
    """
    principal = request.headers.get(config.AUTH.PRINCIPAL_HEADER)
    return await UserService(db).resolve(principal)

# Type aliases for easier usage in route handlers
DatabaseDep = Annotated[Database, Depends(get_db)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
