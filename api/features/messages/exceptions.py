"""Exceptions for the Messages feature."""
from typing import Any, Dict, Optional

from api.shared.exceptions import AppException


class MessagingException(AppException):
    """Base exception for messaging operations."""
    pass


class CounterpartNotFound(MessagingException):
    """Raised when the other participant of a conversation does not exist.

    Answered with 401 rather than 404, matching the existing clients.
    """

    status_code = 401

    def __init__(self, other_id: str):
        super().__init__("User not found", "COUNTERPART_NOT_FOUND", {"other_id": other_id})


class EnrichmentError(MessagingException):
    """Raised when user lookups for a conversation list fail."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "ENRICHMENT_ERROR", details)
