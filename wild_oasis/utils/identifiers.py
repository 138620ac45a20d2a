"""Entity identifier generation and format checks."""

import uuid

from wild_oasis.errors import InvalidInputError


def new_id() -> str:
    """Return a fresh identifier (canonical UUID4 text)."""
    return str(uuid.uuid4())


def is_valid_id(value: object) -> bool:
    """
    Check whether value is a UUID string in canonical lowercase form.

    Example:
        >>> is_valid_id("3f1c1d4e-8a55-4f0e-9d59-0b7f5f5e2c11")
        True
        >>> is_valid_id("3F1C1D4E-8A55-4F0E-9D59-0B7F5F5E2C11")
        False
        >>> is_valid_id("abc")
        False
    """
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value
    except ValueError:
        return False


def require_valid_id(value: object, entity: str) -> str:
    """
    Return value unchanged if it is a well-formed identifier.

    Raises:
        InvalidInputError: "Invalid <entity> ID format" otherwise
    """
    if not is_valid_id(value):
        raise InvalidInputError(f"Invalid {entity} ID format")
    return str(value)
