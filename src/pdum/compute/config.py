"""Configuration for pdum_compute.

Settings live in a YAML file under the gcloud config directory, one file per
gcloud configuration, and may be overridden from the environment.
"""

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from pdum.compute.types.constants import DEFAULT_API_ENDPOINT, DEFAULT_SCOPES

PROJECT_ENV_VAR = "GOOGLE_CLOUD_PROJECT"
ENDPOINT_ENV_VAR = "PDUM_COMPUTE_API_ENDPOINT"


@dataclass
class ComputeConfig:
    """Settings for a :class:`~pdum.compute.compute.Compute` context.

    Attributes
    ----------
    project_id : str, optional
        Project to address. When unset the project reported by ADC is used.
    api_endpoint : str
        Root of the Compute Engine REST API.
    scopes : tuple[str, ...]
        OAuth scopes requested when credentials come from ADC.
    timeout : float
        Per-request timeout in seconds.
    max_retries : int
        Retries after the first attempt for connection errors and 429/5xx.
    retry_factor : float
        Multiplier for the exponential backoff waits (``0`` disables waiting).
    max_workers : int
        Size of the thread pool requests run on.
    """

    project_id: Optional[str] = None
    api_endpoint: str = DEFAULT_API_ENDPOINT
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    timeout: float = 60.0
    max_retries: int = 3
    retry_factor: float = 1.0
    max_workers: int = 4

    def __post_init__(self) -> None:
        self.api_endpoint = self.api_endpoint.rstrip("/")
        self.scopes = tuple(self.scopes)
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")


def get_config_dir(config_name: str) -> Path:
    """Get the configuration directory path for a given gcloud config.

    Args:
        config_name: The gcloud configuration name

    Returns:
        Path to the config directory
    """
    home = Path.home()
    return home / ".config" / "gcloud" / "pdum_compute" / config_name


def load_config(path: Optional[Path] = None, *, config_name: str = "default") -> ComputeConfig:
    """Load settings from YAML and apply environment overrides.

    Args:
        path: Explicit YAML file. Defaults to ``config.yaml`` in
            :func:`get_config_dir` for ``config_name``.
        config_name: The gcloud configuration name used for the default path

    Returns:
        The loaded configuration (defaults when no file exists)

    Raises:
        ValueError: If the file is not valid YAML, is not a mapping, or contains
            unknown keys
    """
    if path is None:
        path = get_config_dir(config_name) / "config.yaml"

    data: dict = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file {path} must contain a mapping, got {type(loaded).__name__}")
            data = loaded

    known = {f.name for f in fields(ComputeConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    if os.getenv(PROJECT_ENV_VAR):
        data["project_id"] = os.environ[PROJECT_ENV_VAR]
    if os.getenv(ENDPOINT_ENV_VAR):
        data["api_endpoint"] = os.environ[ENDPOINT_ENV_VAR]

    return ComputeConfig(**data)


def save_config(config: ComputeConfig, path: Path) -> Path:
    """Write ``config`` to ``path`` as YAML, creating parent directories."""
    data = asdict(config)
    data["scopes"] = list(config.scopes)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    return path
