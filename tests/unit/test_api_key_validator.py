"""Unit tests for staff API key validation."""

import pytest
from fastapi import HTTPException

from canteen_mate.auth.api_dependencies import require_staff_api_key
from canteen_mate.auth.api_key_validator import APIKeyValidator


@pytest.mark.unit
class TestAPIKeyValidator:
    """Test suite for APIKeyValidator."""

    def test_requires_at_least_one_key(self) -> None:
        with pytest.raises(ValueError, match="At least one API key"):
            APIKeyValidator(api_keys=[])

    def test_valid_key(self) -> None:
        validator = APIKeyValidator(api_keys=["kitchen-key", "office-key"])

        assert validator.validate("office-key") is True

    def test_invalid_key(self) -> None:
        validator = APIKeyValidator(api_keys=["kitchen-key"])

        assert validator.validate("kitchen") is False
        assert validator.validate("") is False


@pytest.mark.unit
class TestRequireStaffApiKey:
    """Test suite for the require_staff_api_key dependency."""

    def test_missing_key(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_staff_api_key(x_api_key=None, validator=APIKeyValidator(["k"]))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Missing API key"

    def test_invalid_key(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_staff_api_key(x_api_key="wrong", validator=APIKeyValidator(["k"]))

        assert exc_info.value.detail == "Invalid API key"

    def test_no_validator_rejects(self) -> None:
        with pytest.raises(HTTPException):
            require_staff_api_key(x_api_key="k", validator=None)

    def test_valid_key_returned(self) -> None:
        assert require_staff_api_key(x_api_key="k", validator=APIKeyValidator(["k"])) == "k"
