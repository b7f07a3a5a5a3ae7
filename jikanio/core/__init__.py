"""
Core request machinery for jikanio.

URL building, argument validation, execution and the pending-request handle.
"""

from . import executor, outcome, request, urls, validators

__all__ = ["executor", "outcome", "request", "urls", "validators"]
