"""Internal helpers to obtain credentials and authenticated HTTP sessions.

These helpers centralize `google.auth` usage to keep options consistent
across the codebase. They are intentionally private; the public API surface
remains in `compute.py` and `types`.
"""

from __future__ import annotations

from typing import Iterable, Optional

import google.auth
from google.auth.credentials import Credentials
from google.auth.transport.requests import AuthorizedSession


def default_credentials(scopes: Iterable[str]) -> tuple[Credentials, Optional[str]]:
    """Application Default Credentials and the project they report, if any."""
    return google.auth.default(scopes=list(scopes))


def authorized_session(credentials: Credentials) -> AuthorizedSession:
    """A `requests` session that attaches and refreshes OAuth tokens."""
    return AuthorizedSession(credentials)
