"""Runtime settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_RESOURCE_SERVER_URL = "https://places-api.x402hub.xyz"
DEFAULT_ENDPOINT_PATH = "/api/places/text-search"
DEFAULT_NETWORK = "eip155:8453"

# Environment variable -> settings field
ENV_FIELDS = {
    "PRIVATE_KEY": "private_key",
    "RESOURCE_SERVER_URL": "resource_server_url",
    "ENDPOINT_PATH": "endpoint_path",
    "REQUEST_TIMEOUT": "request_timeout",
    "CONNECT_TIMEOUT": "connect_timeout",
    "X402_NETWORK": "network",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Immutable server settings.

    Every value has a default except the wallet private key. Without a key the
    server runs in demo mode.
    """

    private_key: Optional[str] = None
    resource_server_url: str = DEFAULT_RESOURCE_SERVER_URL
    endpoint_path: str = DEFAULT_ENDPOINT_PATH
    request_timeout: float = 30.0
    connect_timeout: float = 10.0
    network: str = DEFAULT_NETWORK
    log_level: str = "INFO"

    model_config = ConfigDict(frozen=True)

    @field_validator("resource_server_url")
    def validate_resource_server_url(cls, v):
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("resource_server_url must be an http(s) URL")
        return v

    @field_validator("endpoint_path")
    def validate_endpoint_path(cls, v):
        v = v.strip()
        if not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("request_timeout", "connect_timeout")
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeouts must be greater than zero")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v):
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unsupported log level: {v}")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ`` after
                loading a ``.env`` file if one is present.

        Returns:
            Validated settings.

        Raises:
            ConfigurationError: If a value fails validation.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        values = {}
        for env_name, field in ENV_FIELDS.items():
            raw = environ.get(env_name)
            if raw is None or raw.strip() == "":
                continue
            values[field] = raw

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
