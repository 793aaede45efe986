"""Internal helper functions."""

from __future__ import annotations

import logging
from concurrent.futures import CancelledError, Future
from typing import Callable

from rich.logging import RichHandler

logger = logging.getLogger("pdum.compute")


def _join_url(*segments: str) -> str:
    """Join URL segments with ``/``, dropping empty ones.

    Leading and trailing slashes on each segment are trimmed so that
    ``_join_url("https://host/v1/", "/projects", "", "p")`` yields
    ``"https://host/v1/projects/p"``.
    """
    parts = [segment.strip("/") for segment in segments if segment]
    return "/".join(part for part in parts if part)


def _attach_callback(future: Future, callback: Callable[..., None], arity: int) -> None:
    """Deliver the outcome of ``future`` to a ``callback(error, *results)``.

    On success the callback receives ``None`` followed by the result tuple.
    On failure it receives the error followed by ``arity`` ``None`` values, so
    callers can unpack both outcomes the same way.
    """

    def _done(f: Future) -> None:
        if f.cancelled():
            callback(CancelledError(), *([None] * arity))
            return
        error = f.exception()
        if error is not None:
            callback(error, *([None] * arity))
            return
        callback(None, *f.result())

    future.add_done_callback(_done)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a rich handler to the ``pdum.compute`` logger.

    The library never installs handlers on import; command line entry points
    call this once. Calling it again only adjusts the level.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
