"""Unit tests for the service error hierarchy"""

import pytest

from catalog_service.core.exceptions import (
    DuplicateKeyError,
    ExtractionError,
    NotFoundError,
    ServiceError,
    StoreError,
    ValidationError,
)


@pytest.mark.unit
class TestServiceErrors:
    """Test error codes, statuses and rendering"""

    @pytest.mark.parametrize("error_cls,status_code,code", [
        (NotFoundError, 404, "not_found"),
        (ValidationError, 422, "validation_error"),
        (DuplicateKeyError, 409, "duplicate_key"),
        (StoreError, 500, "store_error"),
        (ExtractionError, 500, "extraction_error"),
    ])
    def test_class_defaults(self, error_cls, status_code, code):
        """Happy path: each error carries its HTTP status and code"""
        error = error_cls("boom")
        assert isinstance(error, ServiceError)
        assert (error.status_code, error.code, error.details) == (status_code, code, {})

    def test_overrides(self):
        """Happy path: status and code can be overridden per instance"""
        error = ValidationError("too big", status_code=413, details={"file_size": 5})
        assert error.status_code == 413
        assert ValidationError("x").status_code == 422

    def test_str(self):
        """Happy path: string form includes code and details"""
        assert str(NotFoundError("gone")) == "[not_found] gone"
        assert str(StoreError("failed", details={"error": "x"})) == "[store_error] failed :: {'error': 'x'}"
