"""
Service Configuration

Loads .env files at import time and exposes the settings the data API
client needs. Settings are read on first use, not at import, so a
missing variable fails the first request with a descriptive error
instead of breaking module import.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from core.errors.exceptions import ConfigurationError

GRAPHQL_ENDPOINT_ENV = "AMPLIFY_DATA_GRAPHQL_ENDPOINT"
REGION_ENV = "AMPLIFY_DATA_REGION"
TIMEOUT_ENV = "DATA_API_TIMEOUT_SECONDS"
LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_TIMEOUT_SECONDS = 30.0

# Load .env first, then .env.local (which can override)
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"
env_local_file = project_root / ".env.local"

if env_file.exists():
    load_dotenv(env_file, override=False)
if env_local_file.exists():
    load_dotenv(env_local_file, override=True)


def _require(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigurationError(f"{name} is not set")
    return value


@dataclass(frozen=True)
class DataApiSettings:
    """Connection settings for the tenant data API."""

    endpoint: str
    region: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "DataApiSettings":
        """
        Build settings from the environment.

        Raises:
            ConfigurationError: If the endpoint or region is missing, or the
                timeout is not a number
        """
        endpoint = _require(GRAPHQL_ENDPOINT_ENV)
        region = _require(REGION_ENV)

        raw_timeout = os.getenv(TIMEOUT_ENV)
        timeout = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}"
                ) from e

        return cls(endpoint=endpoint, region=region, timeout=timeout)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Lambda installs its own root handler before our code runs
    logging.getLogger().setLevel(level)
