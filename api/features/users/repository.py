"""User repository using base repository pattern."""
from api.features.users.entities.user import User
from api.shared.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user entities."""

    model = User
