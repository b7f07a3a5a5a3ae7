"""
Command-line interface for jikanio using Typer.

Every resource method of the client is exposed as a command that prints the
decoded JSON with Rich, or a formatted error with a distinct exit code.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import pydantic
import typer
from rich.console import Console
from rich.traceback import install as install_rich_traceback

from ..clients import Jikan
from ..config import Settings, get_settings
from ..core.outcome import Failure, ResponseOutcome
from ..core.request import PendingRequest
from ..utils.exceptions import ErrorCategory, JikanError
from ..utils.logging import generate_correlation_id, get_logger, setup_logging

install_rich_traceback(show_locals=False)

app = typer.Typer(
    name="jikanio",
    help="[bold blue]jikanio[/bold blue] - query the Jikan (MyAnimeList) API",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
err_console = Console(stderr=True)

_logger = get_logger(__name__)
_options: dict[str, Any] = {"api_version": None, "dry_run": False}


class ExitCodes:
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIGURATION_ERROR = 2
    NETWORK_ERROR = 3
    API_ERROR = 4
    VALIDATION_ERROR = 5
    DECODE_ERROR = 6


def get_exit_code_for_error(error: Exception) -> int:
    """Determine appropriate exit code based on error type."""
    if isinstance(error, JikanError):
        category_to_exit_code = {
            ErrorCategory.NETWORK_ERROR: ExitCodes.NETWORK_ERROR,
            ErrorCategory.API_ERROR: ExitCodes.API_ERROR,
            ErrorCategory.USER_ERROR: ExitCodes.VALIDATION_ERROR,
            ErrorCategory.DATA_ERROR: ExitCodes.DECODE_ERROR,
        }
        return category_to_exit_code.get(error.category, ExitCodes.GENERAL_ERROR)
    return ExitCodes.GENERAL_ERROR


def display_enhanced_error(
    message: str, exception: Exception | None = None, show_hints: bool = True
) -> None:
    """Display an error message with troubleshooting hints."""
    err_console.print(f"[red]✗ Error:[/red] {message}")

    if isinstance(exception, JikanError):
        err_console.print(
            f"[dim]Category: {exception.category.value.replace('_', ' ').title()}[/dim]"
        )
        if show_hints and exception.troubleshooting_hints:
            err_console.print("\n[bold yellow]💡 Troubleshooting Tips:[/bold yellow]")
            for i, hint in enumerate(exception.troubleshooting_hints, 1):
                err_console.print(f"  {i}. {hint}")

    _logger.debug(f"CLI Error: {message}", error_message=message)


def parse_params(values: list[str] | None) -> dict[str, str]:
    """Turn repeated ``key=value`` options into an ordered mapping."""
    params: dict[str, str] = {}
    for value in values or []:
        key, sep, item = value.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {value!r}")
        params[key] = item
    return params


def get_configured_settings() -> Settings:
    try:
        return get_settings()
    except pydantic.ValidationError as e:
        display_enhanced_error(f"Invalid configuration: {e}")
        raise typer.Exit(ExitCodes.CONFIGURATION_ERROR)


async def _fetch(
    build: Callable[[Jikan], PendingRequest], settings: Settings
) -> ResponseOutcome | None:
    async with Jikan(settings) as jikan:
        if _options["api_version"] is not None:
            jikan.set_version(_options["api_version"])

        pending = build(jikan)
        if _options["dry_run"]:
            console.print(pending.url, soft_wrap=True)
            return None

        _logger.debug("Fetching", url=pending.url)
        return await pending


def run_request(build: Callable[[Jikan], PendingRequest]) -> None:
    """Run one resource call and print its result."""
    settings = get_configured_settings()

    try:
        outcome = asyncio.run(_fetch(build, settings))
    except JikanError as e:
        display_enhanced_error(e.message, e)
        raise typer.Exit(get_exit_code_for_error(e))

    if outcome is None:
        return

    if isinstance(outcome, Failure):
        display_enhanced_error(
            f"Jikan responded with HTTP {outcome.status_code}", show_hints=False
        )
        err_console.print(outcome.response.text, markup=False, highlight=False)
        raise typer.Exit(ExitCodes.API_ERROR)

    console.print_json(data=outcome.data)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines"),
    api_version: int | None = typer.Option(
        None, "--api-version", help="Jikan API version to query"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the request URL instead of sending it"
    ),
):
    """Query the Jikan API from the command line."""
    settings = get_configured_settings()
    setup_logging(
        verbose=verbose,
        quiet=quiet,
        json_logs=json_logs or settings.log_format.lower() == "json",
        level_name=settings.log_level,
    )
    _logger.with_correlation_id(generate_correlation_id())

    _options["api_version"] = api_version
    _options["dry_run"] = dry_run


@app.command("anime")
def anime_command(
    id: int = typer.Argument(..., help="MyAnimeList anime ID"),
    request: str | None = typer.Argument(None, help="Sub-resource, e.g. episodes"),
    parameter: int | None = typer.Argument(None, help="Sub-resource parameter, e.g. page"),
):
    """Anime details."""
    run_request(lambda jikan: jikan.anime(id, request, parameter))


@app.command("manga")
def manga_command(
    id: int = typer.Argument(..., help="MyAnimeList manga ID"),
    request: str | None = typer.Argument(None, help="Sub-resource, e.g. characters"),
    parameter: int | None = typer.Argument(None, help="Sub-resource parameter, e.g. page"),
):
    """Manga details."""
    run_request(lambda jikan: jikan.manga(id, request, parameter))


@app.command("person")
def person_command(
    id: int = typer.Argument(..., help="MyAnimeList person ID"),
    request: str | None = typer.Argument(None, help="Sub-resource, e.g. pictures"),
):
    """Person details."""
    run_request(lambda jikan: jikan.person(id, request))


@app.command("character")
def character_command(
    id: int = typer.Argument(..., help="MyAnimeList character ID"),
    request: str | None = typer.Argument(None, help="Sub-resource, e.g. pictures"),
):
    """Character details."""
    run_request(lambda jikan: jikan.character(id, request))


@app.command("search")
def search_command(
    kind: str = typer.Argument(..., help="anime, manga, person or character"),
    query: str | None = typer.Option(None, "--query", "-q", help="Search term (3+ letters)"),
    param: list[str] | None = typer.Option(
        None, "--param", "-p", help="Extra filter as key=value, repeatable"
    ),
):
    """Search the catalogue."""
    params: dict[str, str] = {}
    if query is not None:
        params["q"] = query
    params.update(parse_params(param))
    run_request(lambda jikan: jikan.search(kind, params))


@app.command("season")
def season_command(
    year: int = typer.Argument(..., help="Season year"),
    season: str = typer.Argument(..., help="summer, spring, fall or winter"),
):
    """Anime airing in one season."""
    run_request(lambda jikan: jikan.season(year, season))


@app.command("season-archive")
def season_archive_command():
    """All years and seasons available."""
    run_request(lambda jikan: jikan.season_archive())


@app.command("season-later")
def season_later_command():
    """Anime announced for future seasons."""
    run_request(lambda jikan: jikan.season_later())


@app.command("schedule")
def schedule_command(
    day: str | None = typer.Argument(None, help="monday..sunday, other or unknown"),
):
    """Weekly airing schedule."""
    run_request(lambda jikan: jikan.schedule(day))


@app.command("top")
def top_command(
    kind: str = typer.Argument(..., help="anime, manga, people or characters"),
    page: int | None = typer.Argument(None, help="Page number"),
    subtype: str | None = typer.Argument(None, help="e.g. airing, upcoming, bypopularity"),
):
    """Top rankings."""
    run_request(lambda jikan: jikan.top(kind, page, subtype))


@app.command("genre")
def genre_command(
    kind: str = typer.Argument(..., help="anime or manga"),
    genre_id: int = typer.Argument(..., help="Genre ID"),
    page: int | None = typer.Argument(None, help="Page number"),
):
    """Entries in one genre."""
    run_request(lambda jikan: jikan.genre(kind, genre_id, page))


@app.command("producer")
def producer_command(
    producer_id: int = typer.Argument(..., help="Producer ID"),
    page: int | None = typer.Argument(None, help="Page number"),
):
    """Anime by one producer."""
    run_request(lambda jikan: jikan.producer(producer_id, page))


@app.command("magazine")
def magazine_command(
    magazine_id: int = typer.Argument(..., help="Magazine ID"),
    page: int | None = typer.Argument(None, help="Page number"),
):
    """Manga serialized in one magazine."""
    run_request(lambda jikan: jikan.magazine(magazine_id, page))


@app.command("user")
def user_command(
    username: str = typer.Argument(..., help="MyAnimeList username"),
    request: str = typer.Argument(..., help="profile, history, animelist, ..."),
    extra: list[str] | None = typer.Argument(None, help="Extra path segments, e.g. all"),
    param: list[str] | None = typer.Option(
        None, "--param", "-p", help="Query parameter as key=value, repeatable"
    ),
):
    """User profile, lists and history."""
    query = parse_params(param) or None
    run_request(lambda jikan: jikan.user(username, request, extra or (), query))


@app.command("club")
def club_command(id: int = typer.Argument(..., help="Club ID")):
    """Club details."""
    run_request(lambda jikan: jikan.club(id))


@app.command("club-members")
def club_members_command(
    id: int = typer.Argument(..., help="Club ID"),
    page: int = typer.Argument(..., help="Page number"),
):
    """Members of a club."""
    run_request(lambda jikan: jikan.club_members(id, page))


@app.command("meta")
def meta_command(
    kind: str | None = typer.Argument(None, help="anime, manga, search, top, ..."),
    period: str | None = typer.Argument(None, help="today, weekly or monthly"),
    offset: int | None = typer.Argument(None, help="Offset"),
):
    """API request statistics."""
    run_request(lambda jikan: jikan.meta(kind, period, offset))


@app.command("status")
def status_command():
    """API status."""
    run_request(lambda jikan: jikan.status())
