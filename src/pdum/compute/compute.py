"""The Compute Engine context resources are addressed through.

A :class:`Compute` binds a project id and credentials to an authenticated
HTTP session and a worker pool. Resource proxies such as
:class:`~pdum.compute.types.project.Project` hang off it and send every
request through :meth:`Compute.request`, which owns retries and error
classification.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

import backoff
import google.auth.exceptions
import requests
from google.auth.credentials import Credentials

from pdum.compute import _clients
from pdum.compute._helpers import _join_url
from pdum.compute.config import ComputeConfig
from pdum.compute.types import (
    RETRYABLE_STATUS_CODES,
    ApiError,
    ApiResponse,
    AuthError,
    Project,
    TransportError,
)

logger = logging.getLogger(__name__)


class Compute:
    """Client context for one Compute Engine project.

    Parameters
    ----------
    project_id : str, optional
        Project to address. Falls back to ``config.project_id`` and then to the
        project reported by Application Default Credentials.
    credentials : Credentials, optional
        Explicit credentials. When omitted, ADC is resolved on the first request.
    config : ComputeConfig, optional
        Endpoint, timeout, retry and pool settings.
    session : requests.Session, optional
        Pre-built session to send requests with (it must handle auth itself).
    executor : Executor, optional
        Pool to run operations on. One is created on demand otherwise.

    Raises
    ------
    ValueError
        If no project id can be determined.
    AuthError
        If ADC must be consulted for the project id and cannot be loaded.

    Example
    -------
    >>> with Compute("my-project") as compute:
    ...     metadata, _ = compute.project().get_metadata().result()
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        *,
        credentials: Optional[Credentials] = None,
        config: Optional[ComputeConfig] = None,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.config = config or ComputeConfig()
        self._credentials = credentials
        self._session = session
        self._owns_session = session is None
        self._executor = executor
        self._owns_executor = executor is None
        self._lock = threading.Lock()
        self._worker_idents: set[int] = set()

        resolved = project_id or self.config.project_id or self._default_project_id()
        if not resolved:
            raise ValueError(
                "No project ID could be determined. Pass project_id, set it in the config file, "
                "or set the GOOGLE_CLOUD_PROJECT environment variable."
            )
        self.project_id: str = resolved

    @property
    def base_url(self) -> str:
        return f"{self.config.api_endpoint}/projects"

    @property
    def id(self) -> str:
        return self.project_id

    @property
    def url(self) -> str:
        return _join_url(self.base_url, self.id)

    def project(self) -> Project:
        """Return a proxy for this context's project."""
        return Project(self)

    def request(
        self,
        method: str,
        uri: str = "",
        *,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> ApiResponse:
        """Send ``method`` to ``uri`` (relative to :attr:`url`) and decode the JSON reply.

        Connection failures and 429/500/502/503 responses are retried with
        exponential backoff, up to ``config.max_retries`` times.

        Raises
        ------
        TransportError
            The request never got an HTTP response.
        AuthError
            Credentials could not be loaded or refreshed.
        ApiError
            The response status was >= 400 or the body was not JSON.
        """
        url = _join_url(self.url, uri)
        send = backoff.on_exception(
            backoff.expo,
            (TransportError, ApiError),
            max_tries=self.config.max_retries + 1,
            giveup=_is_permanent,
            on_backoff=_log_backoff,
            logger=None,
            factor=self.config.retry_factor,
        )(self._send)
        return send(method, url, json=json, params=params)

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        """Run ``fn(*args, **kwargs)`` on the worker pool."""
        return self._get_executor().submit(fn, *args, **kwargs)

    def close(self) -> None:
        """Shut down the pool and session if this context created them.

        Safe to call from an operation callback: a pool worker cannot wait for
        itself, so from there the pool is shut down without waiting.
        """
        with self._lock:
            executor = self._executor if self._owns_executor else None
            if executor is not None:
                self._executor = None
        # In-flight work may still need the lock to reach the session.
        if executor is not None:
            executor.shutdown(wait=threading.get_ident() not in self._worker_idents)

        with self._lock:
            session = self._session if self._owns_session else None
            if session is not None:
                self._session = None
        if session is not None:
            session.close()

    def __enter__(self) -> "Compute":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Compute(project_id={self.project_id!r})"

    def _send(self, method: str, url: str, *, json: Any = None, params: Optional[dict] = None) -> ApiResponse:
        session = self._get_session()
        logger.debug("%s %s", method, url)
        try:
            response = session.request(method, url, json=json, params=params, timeout=self.config.timeout)
        except google.auth.exceptions.GoogleAuthError as e:
            raise AuthError(f"Could not authorize {method} {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return _parse_response(response)

    def _default_project_id(self) -> Optional[str]:
        credentials, project_id = self._load_default_credentials()
        if self._credentials is None:
            self._credentials = credentials
        return project_id

    def _load_default_credentials(self) -> tuple[Credentials, Optional[str]]:
        try:
            return _clients.default_credentials(self.config.scopes)
        except google.auth.exceptions.DefaultCredentialsError as e:
            raise AuthError(f"Could not load Application Default Credentials: {e}") from e

    def _get_session(self) -> requests.Session:
        with self._lock:
            if self._session is None:
                if self._credentials is None:
                    self._credentials, _ = self._load_default_credentials()
                self._session = _clients.authorized_session(self._credentials)
            return self._session

    def _register_worker(self) -> None:
        self._worker_idents.add(threading.get_ident())

    def _get_executor(self) -> Executor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers,
                    thread_name_prefix="pdum-compute",
                    initializer=self._register_worker,
                )
            return self._executor


def _is_permanent(error: Exception) -> bool:
    """Return True for errors another attempt cannot fix."""
    return isinstance(error, ApiError) and error.code not in RETRYABLE_STATUS_CODES


def _log_backoff(details: dict) -> None:
    logger.warning(
        "Retrying %s %s in %.1fs after attempt %d: %s",
        details["args"][0],
        details["args"][1],
        details["wait"],
        details["tries"],
        details.get("exception"),
    )


def _parse_response(response: requests.Response) -> ApiResponse:
    """Decode the JSON body, raising :class:`ApiError` for error statuses or bad JSON."""
    body: Any = {}
    parse_failed = False
    if response.content:
        try:
            body = response.json()
        except ValueError:
            body = response.text
            parse_failed = True

    api_response = ApiResponse.from_requests(response, body)

    if response.status_code >= 400:
        message, errors = _error_details(response, body)
        raise ApiError(response.status_code, message, errors=errors, response=api_response)

    if parse_failed:
        raise ApiError(response.status_code, "Cannot parse JSON response", response=api_response)

    return api_response


def _error_details(response: requests.Response, body: Any) -> tuple[str, list[dict]]:
    """Pull message and detail list out of a Google error envelope."""
    fallback = response.reason or f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return (body.strip() if isinstance(body, str) and body.strip() else fallback), []

    error = body.get("error")
    if isinstance(error, dict):
        return error.get("message") or fallback, list(error.get("errors", []))
    if isinstance(error, str):
        # OAuth endpoints reply with {"error": "...", "error_description": "..."}
        return body.get("error_description") or error, []
    return fallback, []


__all__ = ["Compute"]
