"""Models for the Users feature."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from api.features.users.entities.user import User as UserEntity


class UserModel(BaseModel):
    """Domain model for User."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="User identifier")
    name: str = Field(description="Display name")
    email: Optional[str] = Field(default=None, description="Contact email")

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "UserModel":
        """Create model from database entity."""
        return cls(id=entity.id, name=entity.name, email=entity.email)
