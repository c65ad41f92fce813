"""Entity registry to ensure SQLAlchemy loads all table metadata.

Import all entity modules here so Alembic and test fixtures can discover them.
"""
# Import base first to expose BaseEntity.metadata
from api.shared.entities.base import BaseEntity  # noqa: F401

# Feature: Users
from api.features.users.entities.user import User  # noqa: F401

# Feature: Messages
from api.features.messages.entities.message import Message  # noqa: F401
