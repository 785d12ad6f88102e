"""Exception hierarchy for the Document Catalog Service."""

from typing import Any, Dict, Optional

from fastapi import status


class ServiceError(Exception):
    """Base service error with HTTP semantics."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "service_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} :: {self.details}"
        return f"[{self.code}] {self.message}"


class NotFoundError(ServiceError):
    """Requested document or category has no backing record."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ValidationError(ServiceError):
    """Required input is missing or out of bounds."""

    status_code = 422
    code = "validation_error"


class DuplicateKeyError(ServiceError):
    """Explicit creation collides with an existing unique name."""

    status_code = status.HTTP_409_CONFLICT
    code = "duplicate_key"


class StoreError(ServiceError):
    """A persistence or query operation failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_error"


class ExtractionError(ServiceError):
    """Text extraction failed. Recovered locally as empty content."""

    code = "extraction_error"


class FileCleanupError(ServiceError):
    """Removing a stored file failed. Recovered locally during deletion."""

    code = "file_cleanup_error"
