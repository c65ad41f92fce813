"""Service layer for the Users feature."""
from typing import List, Optional, Tuple

import structlog
from sqlalchemy.exc import SQLAlchemyError

from api.features.users.models import UserModel
from api.features.users.repository import UserRepository
from api.shared.exceptions import PersistenceError
from infra.resources import DatabaseResource

logger = structlog.get_logger("messaging.users.service")


class UserService:
    """Read access to user records.

    Every call opens its own short-lived session so that lookups may run
    concurrently on the event loop.
    """

    def __init__(self, database: DatabaseResource):
        self.database = database

    async def get_user(self, user_id: Optional[str]) -> Optional[UserModel]:
        """Load a user by identifier.

        Returns None for a missing identifier or an unknown user. Storage
        failures propagate as SQLAlchemy errors.
        """
        if user_id is None:
            return None
        async with self.database.get_session() as session:
            entity = await UserRepository(session).get_by_id(str(user_id))
        return UserModel.from_entity(entity) if entity else None

    async def list_users(
        self, *, offset: int = 0, limit: int = 100
    ) -> Tuple[List[UserModel], int]:
        """List users ordered by name."""
        try:
            async with self.database.get_session() as session:
                entities, total = await UserRepository(session).list(
                    offset=offset, limit=limit, order_by="name"
                )
        except SQLAlchemyError as e:
            logger.error("Failed to list users", error=str(e))
            raise PersistenceError("Failed to list users") from e
        return [UserModel.from_entity(e) for e in entities], total
