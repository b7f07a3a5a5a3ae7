"""
Command-line interface module for jikanio.

Typer application with Rich formatting over the async client.
"""

from .main import app

__all__ = ["app"]
