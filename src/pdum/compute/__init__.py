"""A Google Compute Engine client built on google-auth"""

from pdum.compute._helpers import configure_logging
from pdum.compute.compute import Compute
from pdum.compute.config import ComputeConfig, load_config
from pdum.compute.types import (
    ApiError,
    ApiResponse,
    AuthError,
    ComputeError,
    Method,
    Project,
    Resource,
    TransportError,
)

__version__ = "0.1.0-alpha"


__all__ = [
    "__version__",
    "configure_logging",
    "load_config",
    "ApiError",
    "ApiResponse",
    "AuthError",
    "Compute",
    "ComputeConfig",
    "ComputeError",
    "Method",
    "Project",
    "Resource",
    "TransportError",
]
