"""Database query utility functions."""
from typing import Optional, TypeVar, Type, Any
from uuid import UUID
from sqlalchemy.orm import Session

from evcharge.utils.exceptions import ErrorCode
from evcharge.utils.result import ServiceResult

T = TypeVar("T")


def parse_identifier(value: Optional[str]) -> Optional[UUID]:
    """
    Parse an opaque identifier into the storage layer's native UUID.

    Empty strings and the literal ``"undefined"`` sent by careless clients
    are rejected the same way as any other malformed value.

    Args:
        value: Raw identifier from the request path

    Returns:
        UUID, or None if the value is not a well-formed identifier
    """
    if value is None:
        return None
    value = value.strip()
    if not value or value == "undefined":
        return None
    try:
        return UUID(value)
    except ValueError:
        return None


def get_by_id(
    db: Session,
    model: Type[T],
    id_value: Optional[str],
    error_message: Optional[str] = None,
) -> ServiceResult[T]:
    """
    Get a model instance by ID.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id_value: ID value as received from the client
        error_message: Custom error message if not found

    Returns:
        Result holding the instance, or an INVALID_IDENTIFIER / NOT_FOUND failure
    """
    identifier = parse_identifier(id_value)
    if identifier is None:
        return ServiceResult.fail(ErrorCode.INVALID_IDENTIFIER, f"Invalid {model.__name__} ID format")

    instance = db.get(model, identifier)
    if instance is None:
        return ServiceResult.fail(ErrorCode.NOT_FOUND, error_message or f"{model.__name__} not found")

    return ServiceResult.ok(instance)


def get_by_field(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
) -> Optional[T]:
    """
    Get a model instance by a specific field.

    Args:
        db: Database session
        model: SQLAlchemy model class
        field_name: Name of the field to filter by
        field_value: Value to filter by

    Returns:
        Model instance or None
    """
    field = getattr(model, field_name)
    return db.query(model).filter(field == field_value).first()
