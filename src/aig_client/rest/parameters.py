"""Helpers for carrying structured values in query strings."""

import json
from collections.abc import Iterable
from typing import Any


def bool_to_string(value: bool | None) -> str | None:
    if value is None:
        return None
    return "true" if value else "false"


def array_to_string(values: Iterable[Any] | None) -> str | None:
    """Join values with commas, or None when there is nothing to send."""
    if values is None:
        return None
    return ",".join(str(getattr(v, "value", v)) for v in values)


def array_from_string(value: str | None) -> list[str] | None:
    if value is None:
        return None
    if value == "":
        return []
    return value.split(",")


def object_to_string(value: Any) -> str | None:
    """Encode a structured value as compact JSON."""
    if value is None:
        return None
    return json.dumps(value, separators=(",", ":"))


def object_from_string(value: str | None) -> Any:
    if value is None or value == "":
        return None
    return json.loads(value)
