"""Argument guards applied before a request is issued."""

from enum import Enum
from typing import Any, TypeVar

from .errors import GuardError

E = TypeVar("E", bound=Enum)


def string_value(source: str, name: str, value: Any) -> str:
    """Ensure value is a non-empty string.

    Args:
        source: Label of the component performing the check
        name: Argument name, used in the error message
        value: Value to check

    Returns:
        The value, unchanged

    Raises:
        GuardError: If value is not a string or is empty
    """
    if not isinstance(value, str) or value == "":
        raise GuardError(source, name, value)
    return value


def enum_value(source: str, name: str, value: Any, enum_type: type[E]) -> E:
    """Coerce value to a member of enum_type.

    Accepts either a member or its string value.

    Raises:
        GuardError: If value does not name a member
    """
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise GuardError(
            source,
            name,
            value,
            message=f"{source}: '{name}' must be one of: {allowed}",
        ) from None
