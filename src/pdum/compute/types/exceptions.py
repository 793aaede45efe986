"""Custom exceptions for pdum.compute types."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .response import ApiResponse


class ComputeError(Exception):
    """Base class for every error raised by pdum.compute."""


class TransportError(ComputeError):
    """Raised when a request never produced an HTTP response (DNS, TLS, timeouts, resets)."""


class AuthError(ComputeError):
    """Raised when credentials cannot be found or refreshed."""


class ApiError(ComputeError):
    """Raised for non-2xx responses and for response bodies that are not valid JSON.

    Attributes
    ----------
    code : int
        HTTP status code (or the ``error.code`` of the Google error envelope).
    message : str
        Server-provided message, falling back to the HTTP reason phrase.
    errors : list[dict]
        The ``error.errors`` detail list, empty when absent.
    response : ApiResponse, optional
        The response that carried the error.
    """

    def __init__(
        self,
        code: int,
        message: str,
        *,
        errors: Optional[list[dict]] = None,
        response: Optional["ApiResponse"] = None,
    ) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message
        self.errors = list(errors or [])
        self.response = response

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


__all__ = ["ApiError", "AuthError", "ComputeError", "TransportError"]
