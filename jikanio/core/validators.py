"""
Argument validation for resource methods.

Every check runs synchronously, before a request is built, so an invalid call
never reaches the network.
"""

from collections.abc import Mapping
from typing import Any

from ..utils.exceptions import SearchQueryError, ValidationError

MIN_QUERY_LENGTH = 3


def assert_param(kind: str, value: Any) -> bool:
    """Return whether ``value`` is a usable ``"string"`` or ``"number"``."""
    if kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return value > 0
    if kind == "string":
        return isinstance(value, str) and value != ""
    raise ValueError(f"Unknown parameter kind: {kind!r}")


def require_number(name: str, value: Any) -> Any:
    if not assert_param("number", value):
        raise ValidationError(
            f"Expected '{name}' to be a positive number, but got {value!r}",
            field_name=name,
            field_value=repr(value),
            validation_rule="positive number",
        )
    return value


def require_string(name: str, value: Any) -> str:
    if not assert_param("string", value):
        raise ValidationError(
            f"Expected '{name}' to be a non-empty string, but got {value!r}",
            field_name=name,
            field_value=repr(value),
            validation_rule="non-empty string",
        )
    return value


def optional_number(name: str, value: Any) -> Any:
    if value is None:
        return None
    return require_number(name, value)


def optional_string(name: str, value: Any) -> str | None:
    if value is None:
        return None
    return require_string(name, value)


def require_mapping(name: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValidationError(
            f"Expected '{name}' to be a mapping, but got {type(value).__name__}",
            field_name=name,
            field_value=repr(value),
            validation_rule="mapping",
        )
    return value


def require_search_query(params: Mapping[str, Any]) -> None:
    """Reject a search whose ``q`` term is shorter than ``MIN_QUERY_LENGTH``."""
    query = params.get("q")
    if query is None:
        return
    if not isinstance(query, str):
        raise ValidationError(
            f"Expected 'q' to be a string, but got {type(query).__name__}",
            field_name="q",
            field_value=repr(query),
            validation_rule="string",
        )
    if len(query) < MIN_QUERY_LENGTH:
        raise SearchQueryError(query, MIN_QUERY_LENGTH)


def require_id(name: str, value: Any) -> int:
    """Resource IDs must be positive integers."""
    if not isinstance(value, int) or not assert_param("number", value):
        raise ValidationError(
            f"Expected '{name}' to be a positive integer ID, but got {value!r}",
            field_name=name,
            field_value=repr(value),
            validation_rule="positive integer",
        )
    return value
