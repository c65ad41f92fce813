"""DTOs for the Users feature."""
from typing import Optional

from pydantic import Field

from api.features.users.models import UserModel
from api.shared.dtos import BaseDTO


class UserDTO(BaseDTO):
    """User DTO."""

    id: str = Field(description="User identifier")
    name: str = Field(description="Display name")
    email: Optional[str] = Field(default=None, description="Contact email")

    @classmethod
    def from_model(cls, model: UserModel) -> "UserDTO":
        return cls(id=model.id, name=model.name, email=model.email)
