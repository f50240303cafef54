"""
Connection configuration for the n8n MCP server.

Values are read once from the environment at startup and passed to the
API client. Required variables are checked here so the server refuses to
start instead of failing on the first tool call.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_TIMEOUT = 30.0


class ConfigError(ValueError):
    """Raised when required configuration is missing"""


@dataclass(frozen=True)
class ConnectionConfig:
    """Where the n8n instance lives and how to authenticate against it"""

    base_url: str
    api_key: str
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        missing = []
        if not self.base_url or not self.base_url.strip():
            missing.append("- N8N_BASE_URL")
        if not self.api_key or not self.api_key.strip():
            missing.append("- N8N_API_KEY")
        if missing:
            raise ConfigError(
                "Missing required environment variables:\n" + "\n".join(missing)
            )
        # frozen dataclass, so normalise through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))

    @property
    def basic_auth(self) -> Optional[tuple[str, str]]:
        """Webhook credentials, only when both halves are configured"""
        if self.username and self.password:
            return (self.username, self.password)
        return None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectionConfig":
        """
        Build the configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ConnectionConfig

        Raises:
            ConfigError: If N8N_BASE_URL or N8N_API_KEY is missing
        """
        env = os.environ if environ is None else environ

        try:
            timeout = float(env.get("N8N_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError:
            timeout = DEFAULT_TIMEOUT
        if timeout <= 0:
            timeout = DEFAULT_TIMEOUT

        return cls(
            base_url=env.get("N8N_BASE_URL", ""),
            api_key=env.get("N8N_API_KEY", ""),
            username=env.get("N8N_USER") or None,
            password=env.get("N8N_PASSWORD") or None,
            timeout=timeout,
        )

    def __repr__(self) -> str:
        # keep secrets out of logs and tracebacks
        return (
            f"ConnectionConfig(base_url={self.base_url!r}, "
            f"username={self.username!r}, timeout={self.timeout!r})"
        )
