"""Shared constants for pdum.compute types."""

from __future__ import annotations

DEFAULT_API_ENDPOINT = "https://compute.googleapis.com/compute/v1"

DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/cloud-platform",)

# Status codes worth another attempt; everything else >= 400 is final.
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503})

__all__ = ["DEFAULT_API_ENDPOINT", "DEFAULT_SCOPES", "RETRYABLE_STATUS_CODES"]
