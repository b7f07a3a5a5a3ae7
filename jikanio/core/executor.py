"""
Request execution.

Issues a single GET and turns the response into a ``ResponseOutcome``.
"""

import json

import httpx
import structlog

from ..config import Settings, get_settings
from ..utils.exceptions import DecodeError, NetworkError
from .outcome import Failure, ResponseOutcome, Success

logger = structlog.get_logger(__name__)

BODY_EXCERPT_LENGTH = 200


async def execute(
    url: str,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> ResponseOutcome:
    """GET ``url`` once and resolve it to ``Success`` or ``Failure``.

    Raises ``DecodeError`` when a 200 body is not JSON and ``NetworkError``
    when no response was received.
    """
    settings = settings or get_settings()

    should_close_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=settings.http_timeout)

    try:
        logger.debug("Requesting Jikan resource", url=url)
        try:
            response = await client.get(
                url, headers={"User-Agent": settings.user_agent}
            )
        except httpx.TransportError as e:
            raise NetworkError(f"Request to {url} failed: {e}", url=url) from e

        logger.debug(
            "Jikan responded", url=url, status_code=response.status_code
        )

        if response.status_code != 200:
            return Failure(response, url=url)

        try:
            return Success(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(
                f"Invalid JSON in 200 response from {url}: {e}",
                url=url,
                body_excerpt=response.text[:BODY_EXCERPT_LENGTH],
            ) from e

    finally:
        if should_close_client:
            await client.aclose()
