"""Public exports for pdum.compute types."""

from __future__ import annotations

from .constants import DEFAULT_API_ENDPOINT, DEFAULT_SCOPES, RETRYABLE_STATUS_CODES
from .exceptions import ApiError, AuthError, ComputeError, TransportError
from .methods import Method
from .project import Project
from .resource import GenericResource, Parent, Resource, operation
from .response import ApiResponse

__all__ = [
    "DEFAULT_API_ENDPOINT",
    "DEFAULT_SCOPES",
    "RETRYABLE_STATUS_CODES",
    "ApiError",
    "ApiResponse",
    "AuthError",
    "ComputeError",
    "GenericResource",
    "Method",
    "Parent",
    "Project",
    "Resource",
    "TransportError",
    "operation",
]
