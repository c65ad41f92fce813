"""Request-scoped models shared by routers, controllers and services."""
from dataclasses import dataclass
from typing import Optional

from api.features.users.models import UserModel


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller for the lifetime of one request."""

    session_user_id: Optional[str] = None
    user: Optional[UserModel] = None
