"""Explicit success/failure envelope returned by stores and services."""
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from evcharge.utils.exceptions import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Standard return value for credential, token and station operations.

    A failed result carries an ``ErrorCode`` and a human readable message;
    validation failures additionally list every failing field in ``errors``.
    """

    success: bool
    data: Optional[T] = None
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, data: T) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        errors: Optional[List[str]] = None,
    ) -> "ServiceResult[T]":
        return cls(success=False, error_code=code, message=message, errors=list(errors or []))

    def __bool__(self) -> bool:
        return self.success


__all__ = ["ServiceResult"]
