"""Uniform result shape returned by every service operation.

Services never raise across their boundary; callers branch on ``success``
and read ``error_code`` when they need to distinguish failures.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Enumeration of service failure kinds."""

    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_ARGUMENT = "invalid_argument"
    OPERATION_FAILED = "operation_failed"


class ServiceResult(BaseModel, Generic[T]):
    """Success flag, optional payload and optional human-readable text."""

    success: bool
    data: T | None = None
    error: str | None = None
    message: str | None = None
    error_code: ErrorCode | None = Field(None, description="Failure kind when success is False")

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> "ServiceResult[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error_code: ErrorCode, error: str) -> "ServiceResult[T]":
        return cls(success=False, error=error, error_code=error_code)
