"""Client configuration."""

import os
from dataclasses import dataclass, field
from typing import Any, Self

from .errors import GuardError
from .models import ProtocolVersion

# Environment variables read by ClientConfig.from_env
ENV_ENDPOINT = "AIG_ENDPOINT"
ENV_PATH_PREFIX = "AIG_PATH_PREFIX"
ENV_PROTOCOL = "AIG_PROTOCOL"
ENV_TIMEOUT = "AIG_TIMEOUT"


@dataclass
class ClientConfig:
    """Connection settings for one client instance."""

    endpoint: str
    path_prefix: str | None = None
    protocol: ProtocolVersion = ProtocolVersion.ANNOTATION
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.endpoint, str) or not self.endpoint:
            raise GuardError("ClientConfig", "endpoint", self.endpoint)
        if not isinstance(self.protocol, ProtocolVersion):
            try:
                self.protocol = ProtocolVersion(self.protocol)
            except ValueError:
                raise GuardError(
                    "ClientConfig",
                    "protocol",
                    self.protocol,
                    message=f"Unknown protocol version: {self.protocol}",
                ) from None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "endpoint": self.endpoint,
            "path_prefix": self.path_prefix,
            "protocol": self.protocol.value,
            "headers": dict(self.headers),
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create from dictionary."""
        return cls(
            endpoint=data["endpoint"],
            path_prefix=data.get("path_prefix"),
            protocol=data.get("protocol", ProtocolVersion.ANNOTATION),
            headers=dict(data.get("headers") or {}),
            timeout=data.get("timeout"),
        )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Self:
        """Build configuration from AIG_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            GuardError: If AIG_ENDPOINT is not set
        """
        env = os.environ if environ is None else environ

        endpoint = env.get(ENV_ENDPOINT, "")
        if not endpoint:
            raise GuardError(
                "ClientConfig",
                "endpoint",
                message=f"{ENV_ENDPOINT} environment variable is not set",
            )

        timeout = env.get(ENV_TIMEOUT)
        return cls(
            endpoint=endpoint,
            path_prefix=env.get(ENV_PATH_PREFIX) or None,
            protocol=env.get(ENV_PROTOCOL) or ProtocolVersion.ANNOTATION,
            timeout=float(timeout) if timeout else None,
        )
