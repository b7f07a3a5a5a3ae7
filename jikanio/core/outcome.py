"""
Request outcomes.

A completed request is either a ``Success`` holding the decoded JSON body or a
``Failure`` holding the raw non-200 response.
"""

from dataclasses import dataclass
from typing import Any

import httpx

from ..utils.exceptions import TransportFailure


@dataclass(frozen=True)
class Success:
    data: Any

    ok = True

    def unwrap(self) -> Any:
        return self.data


@dataclass(frozen=True)
class Failure:
    response: httpx.Response
    url: str | None = None

    ok = False

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def unwrap(self) -> Any:
        """Raise ``TransportFailure`` describing the response."""
        raise TransportFailure(
            f"Jikan responded with HTTP {self.status_code}",
            status_code=self.status_code,
            response=self.response,
            url=self.url,
        )


ResponseOutcome = Success | Failure
