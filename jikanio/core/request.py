"""
Pending requests.

A ``PendingRequest`` is what every resource method hands back: the URL is
fixed when the method is called, and the single GET runs the first time the
request is awaited, started, or given completion handlers.
"""

import asyncio
from collections.abc import Awaitable, Callable, Generator
from typing import Any

import httpx

from ..config import Settings
from ..utils.exceptions import TransportFailure
from .executor import execute
from .outcome import ResponseOutcome, Success


class PendingRequest:
    """One-shot handle on a single Jikan GET.

    Await it for a ``ResponseOutcome``, or register handlers with ``then``.
    Decode and transport errors propagate as exceptions.
    """

    def __init__(
        self,
        url: str,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
        executor: Callable[..., Awaitable[ResponseOutcome]] = execute,
    ):
        self.url = url
        self._settings = settings
        self._client = client
        self._executor = executor
        self._task: asyncio.Task | None = None

    def __repr__(self) -> str:
        return f"<PendingRequest url={self.url!r} state={self.state}>"

    @property
    def state(self) -> str:
        if self._task is None:
            return "pending"
        if not self._task.done():
            return "running"
        if self._task.cancelled():
            return "cancelled"
        return "done"

    def start(self) -> asyncio.Task:
        """Schedule the GET on the running loop. Calling again is a no-op."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(
                self._executor(self.url, client=self._client, settings=self._settings),
                name=f"jikan GET {self.url}",
            )
        return self._task

    def __await__(self) -> Generator[Any, None, ResponseOutcome]:
        return self.start().__await__()

    def then(
        self,
        on_success: Callable[[Any], Any],
        on_failure: Callable[[httpx.Response], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
    ) -> "PendingRequest":
        """Register completion handlers and start the request.

        ``on_success`` gets the decoded body, ``on_failure`` the raw non-200
        response, ``on_error`` any decode, transport or cancellation error.
        Without ``on_failure`` a non-200 reaches ``on_error`` as a
        ``TransportFailure``; an error with no ``on_error`` goes to the event
        loop's exception handler. A cancelled request only notifies
        ``on_error``.
        """

        def _report(task: asyncio.Task, error: BaseException) -> None:
            if on_error is not None:
                on_error(error)
                return
            task.get_loop().call_exception_handler(
                {
                    "message": f"Unhandled error for Jikan request {self.url}",
                    "exception": error,
                    "future": task,
                }
            )

        def _dispatch(task: asyncio.Task) -> None:
            if task.cancelled():
                if on_error is not None:
                    on_error(asyncio.CancelledError())
                return

            error = task.exception()
            if error is not None:
                _report(task, error)
                return

            outcome = task.result()
            if isinstance(outcome, Success):
                on_success(outcome.data)
            elif on_failure is not None:
                on_failure(outcome.response)
            else:
                try:
                    outcome.unwrap()
                except TransportFailure as failure:
                    _report(task, failure)

        self.start().add_done_callback(_dispatch)
        return self

    async def json(self) -> Any:
        """Await the decoded body, raising ``TransportFailure`` on non-200."""
        outcome = await self
        return outcome.unwrap()

    def cancel(self) -> bool:
        if self._task is None:
            return False
        return self._task.cancel()
