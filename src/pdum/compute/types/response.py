"""Raw API response wrapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests


@dataclass(frozen=True)
class ApiResponse:
    """The parts of an HTTP response callers may want after a successful call.

    Attributes
    ----------
    status_code : int
        HTTP status code.
    url : str
        Final request URL.
    headers : dict[str, str]
        Response headers.
    body : Any
        Decoded JSON payload (``{}`` for an empty body).
    """

    status_code: int
    url: str
    headers: dict[str, str] = field(default_factory=dict, compare=False)
    body: Any = None

    @classmethod
    def from_requests(cls, response: requests.Response, body: Any) -> "ApiResponse":
        """Build from a ``requests.Response`` and its already-decoded body."""
        return cls(
            status_code=response.status_code,
            url=response.url or "",
            headers=dict(response.headers),
            body=body,
        )


__all__ = ["ApiResponse"]
