"""
HTTP client modules for external APIs.

Async client for the Jikan REST API.
"""

from .jikan import Jikan

__all__ = ["Jikan"]
