"""
jikanio - async client for the Jikan API

Builds Jikan REST URLs from typed method calls, issues a single GET per call
and hands back decoded JSON or the raw failed response.
"""

from .clients import Jikan
from .config import Settings, get_settings
from .core.outcome import Failure, ResponseOutcome, Success
from .core.request import PendingRequest
from .utils.exceptions import (
    DecodeError,
    JikanError,
    NetworkError,
    SearchQueryError,
    TransportFailure,
    ValidationError,
)

__version__ = "0.1.0"
__all__ = [
    "DecodeError",
    "Failure",
    "Jikan",
    "JikanError",
    "NetworkError",
    "PendingRequest",
    "ResponseOutcome",
    "SearchQueryError",
    "Settings",
    "Success",
    "TransportFailure",
    "ValidationError",
    "get_settings",
]
