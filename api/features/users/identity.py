"""Best-effort resolution of a session-held user identifier."""
from typing import Optional

import structlog

from api.features.users.models import UserModel
from api.features.users.service import UserService

logger = structlog.get_logger("messaging.users.identity")


class IdentityResolver:
    """Turns a session's user identifier into a user record.

    Resolution never raises: an absent identifier, an unknown user and a
    failed lookup all resolve to None.
    """

    def __init__(self, user_service: UserService):
        self.user_service = user_service

    async def resolve(self, user_id: Optional[str]) -> Optional[UserModel]:
        if user_id is None:
            return None
        try:
            return await self.user_service.get_user(user_id)
        except Exception as e:
            logger.warning("Identity lookup failed", user_id=user_id, error=str(e))
            return None
