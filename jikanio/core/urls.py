"""
URL construction for the Jikan REST API.

Paths are built from positional segments where ``None`` means "absent", and
an optional flat query mapping is appended in insertion order.
"""

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote, urlencode

from ..utils.exceptions import ValidationError

Segment = str | int | float | None
QueryValue = str | int | float | bool


def base_url(api_root: str, version: int) -> str:
    """Return the versioned base URL, e.g. ``https://api.jikan.moe/v3``."""
    return f"{api_root.rstrip('/')}/v{version}"


def _format_scalar(value: QueryValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(query: Mapping[str, Any]) -> str:
    """Encode a flat mapping as ``a=b&c=d``, keeping the mapping's order.

    ``None`` values are skipped. Spaces become ``%20``.
    """
    pairs = []
    for key, value in query.items():
        if value is None:
            continue
        if not isinstance(value, (str, int, float, bool)):
            raise ValidationError(
                f"Query parameter '{key}' must be a string, number or boolean",
                field_name=str(key),
                field_value=repr(value),
                validation_rule="flat scalar",
            )
        pairs.append((str(key), _format_scalar(value)))

    return urlencode(pairs, quote_via=quote)


def build_url(
    base: str,
    segments: Iterable[Segment],
    query: Mapping[str, Any] | None = None,
) -> str:
    """Join ``base`` with the present path segments and an optional query."""
    path = "/".join(
        quote(str(segment), safe="") for segment in segments if segment is not None
    )
    url = f"{base.rstrip('/')}/{path}" if path else base.rstrip("/")

    if query:
        encoded = encode_query(query)
        if encoded:
            url = f"{url}?{encoded}"

    return url
