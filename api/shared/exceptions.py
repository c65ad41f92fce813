"""Shared exceptions for the messaging API."""
from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception for the messaging API."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class Unauthenticated(AppException):
    """Raised when a guarded route is reached without a resolved identity."""

    status_code = 401

    def __init__(self, message: str = "Login required"):
        super().__init__(message, "UNAUTHENTICATED")


class NotFoundError(AppException):
    """Raised when a resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(message, "NOT_FOUND", {"resource": resource, "identifier": identifier})


class PersistenceError(AppException):
    """Raised when a store read or write cannot be completed."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PERSISTENCE_ERROR", details)
