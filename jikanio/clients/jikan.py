"""
Jikan API client.

Async client for the Jikan REST API (https://jikan.moe). Each resource method
validates its arguments, builds the request URL and returns a
``PendingRequest``; nothing touches the network until that request is
awaited or given handlers.

Example::

    async with Jikan() as jikan:
        outcome = await jikan.user("yTrev", "history", ["anime"])
        if outcome.ok:
            print(outcome.data)
"""

from collections.abc import Mapping, Sequence
from typing import Any

import httpx
import structlog

from ..config import Settings, get_settings
from ..core.request import PendingRequest
from ..core.urls import Segment, base_url, build_url
from ..core.validators import (
    optional_number,
    optional_string,
    require_id,
    require_mapping,
    require_number,
    require_search_query,
    require_string,
)

logger = structlog.get_logger(__name__)


class Jikan:
    """Client for the Jikan REST API."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self._client = client
        self._owns_client = False
        self._version = self.settings.api_version
        self._base_url = base_url(self.settings.api_root, self._version)

    async def __aenter__(self) -> "Jikan":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.http_timeout)
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    @property
    def version(self) -> int:
        return self._version

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_version(self, version: int) -> None:
        """Point subsequent calls at ``/v<version>``.

        Requests already created keep the URL they were built with.
        """
        require_id("version", version)
        self._version = version
        self._base_url = base_url(self.settings.api_root, self._version)
        logger.debug("Jikan API version changed", version=self._version)

    def _get(
        self, *segments: Segment, query: Mapping[str, Any] | None = None
    ) -> PendingRequest:
        url = build_url(self._base_url, segments, query)
        return PendingRequest(url, self.settings, client=self._client)

    # Media

    def anime(
        self, id: int, request: str | None = None, parameter: int | None = None
    ) -> PendingRequest:
        """Anime details, or one of its sub-resources.

        ``anime(20507)``, ``anime(20507, "episodes")``,
        ``anime(20507, "reviews", 2)``.
        """
        require_id("id", id)
        optional_string("request", request)
        optional_number("parameter", parameter)
        return self._get("anime", id, request, parameter)

    def manga(
        self, id: int, request: str | None = None, parameter: int | None = None
    ) -> PendingRequest:
        """Manga details, or one of its sub-resources.

        ``manga(74341)``, ``manga(74341, "characters")``,
        ``manga(74341, "reviews", 2)``.
        """
        require_id("id", id)
        optional_string("request", request)
        optional_number("parameter", parameter)
        return self._get("manga", id, request, parameter)

    def person(self, id: int, request: str | None = None) -> PendingRequest:
        require_id("id", id)
        optional_string("request", request)
        return self._get("person", id, request)

    def character(self, id: int, request: str | None = None) -> PendingRequest:
        require_id("id", id)
        optional_string("request", request)
        return self._get("character", id, request)

    def search(
        self, type: str, params: Mapping[str, Any] | None = None
    ) -> PendingRequest:
        """Search anime, manga, person or character.

        ``search("anime", {"q": "Kimetsu", "sort": "descending",
        "order_by": "score"})``. A ``q`` shorter than three characters is
        rejected with ``SearchQueryError``.
        """
        require_string("type", type)
        params = require_mapping("params", params if params is not None else {})
        require_search_query(params)
        return self._get("search", type, query=params)

    # Seasons and schedule

    def season(self, year: int, season: str) -> PendingRequest:
        """Anime of one season; ``season`` is summer, spring, fall or winter."""
        require_id("year", year)
        require_string("season", season)
        return self._get("season", year, season)

    def season_archive(self) -> PendingRequest:
        return self._get("season", "archive")

    def season_later(self) -> PendingRequest:
        return self._get("season", "later")

    def schedule(self, day: str | None = None) -> PendingRequest:
        """Weekly schedule, optionally for a single day (monday..sunday, other, unknown)."""
        optional_string("day", day)
        return self._get("schedule", day)

    # Listings

    def top(
        self, type: str, page: int | None = None, subtype: str | None = None
    ) -> PendingRequest:
        """Top anime, manga, people or characters.

        Absent segments are dropped, so a subtype given without a page lands
        in the page slot.
        """
        require_string("type", type)
        optional_number("page", page)
        optional_string("subtype", subtype)
        return self._get("top", type, page, subtype)

    def genre(self, type: str, genre_id: int, page: int | None = None) -> PendingRequest:
        require_string("type", type)
        require_id("genre_id", genre_id)
        optional_number("page", page)
        return self._get("genre", type, genre_id, page)

    def producer(self, producer_id: int, page: int | None = None) -> PendingRequest:
        require_id("producer_id", producer_id)
        optional_number("page", page)
        return self._get("producer", producer_id, page)

    def magazine(self, magazine_id: int, page: int | None = None) -> PendingRequest:
        require_id("magazine_id", magazine_id)
        optional_number("page", page)
        return self._get("magazine", magazine_id, page)

    # Users and clubs

    def user(
        self,
        username: str,
        request: str,
        extra: Sequence[str] = (),
        query: Mapping[str, Any] | None = None,
    ) -> PendingRequest:
        """User profile, lists and history.

        ``user("yTrev", "profile")``, ``user("yTrev", "history", ["anime"])``,
        ``user("yTrev", "animelist", ["all"], {"q": "Kimetsu no Yaiba"})``.
        """
        require_string("username", username)
        require_string("request", request)
        if isinstance(extra, str):
            extra = [extra]
        for index, segment in enumerate(extra):
            require_string(f"extra[{index}]", segment)
        if query is not None:
            require_mapping("query", query)
        return self._get("user", username, request, *extra, query=query)

    def club(self, id: int) -> PendingRequest:
        require_id("id", id)
        return self._get("club", id)

    def club_members(self, id: int, page: int) -> PendingRequest:
        require_id("id", id)
        require_number("page", page)
        return self._get("club", id, "members", page)

    # Meta

    def meta(
        self,
        type: str | None = None,
        period: str | None = None,
        offset: int | None = None,
    ) -> PendingRequest:
        """Request statistics; ``type`` e.g. anime or search, ``period`` today, weekly or monthly."""
        optional_string("type", type)
        optional_string("period", period)
        optional_number("offset", offset)
        return self._get("meta", "requests", type, period, offset)

    def status(self) -> PendingRequest:
        return self._get("meta", "status")
