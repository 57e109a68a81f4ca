"""Service-level exceptions shared across features."""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for service layer failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class StoreError(ServiceException):
    """Persistence failure in the match cache store.

    Raised after the failed batch has been rolled back. Batches committed
    earlier in the same fetch stay in the store.
    """
