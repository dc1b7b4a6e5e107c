"""
Configuration for the Langfuse MCP server.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

log = logging.getLogger(__name__)

DEFAULT_DOMAIN = "https://api.langfuse.com"
DEFAULT_LOG_LEVEL = "INFO"

PUBLIC_KEY_ENV = "LANGFUSE_PUBLIC_KEY"
PRIVATE_KEY_ENV = "LANGFUSE_PRIVATE_KEY"
DOMAIN_ENV = "LANGFUSE_DOMAIN"
LOG_LEVEL_ENV = "LANGFUSE_LOG_LEVEL"

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class LangfuseConfig:
    """Credentials and settings, read once at startup."""

    public_key: str
    private_key: str
    domain: str = DEFAULT_DOMAIN
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        return f"LangfuseConfig(domain={self.domain!r}, public_key={self.public_key[:4]!r}..., log_level={self.log_level!r})"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LangfuseConfig":
        """
        Build the configuration from environment variables.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            The loaded configuration

        Raises:
            ConfigurationError: If the public or private key is missing, or the
                log level is not a known level name
        """
        if environ is None:
            environ = os.environ

        public_key = environ.get(PUBLIC_KEY_ENV, "").strip()
        private_key = environ.get(PRIVATE_KEY_ENV, "").strip()

        missing = [name for name, value in ((PUBLIC_KEY_ENV, public_key), (PRIVATE_KEY_ENV, private_key)) if not value]
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

        domain = (environ.get(DOMAIN_ENV) or DEFAULT_DOMAIN).rstrip("/")
        log_level = (environ.get(LOG_LEVEL_ENV) or "").strip().upper() or DEFAULT_LOG_LEVEL
        if log_level not in LOG_LEVEL_NAMES:
            raise ConfigurationError(
                f"Invalid {LOG_LEVEL_ENV} {log_level!r}, expected one of: {', '.join(LOG_LEVEL_NAMES)}"
            )

        log.debug(f"Loaded configuration for domain {domain}")
        return cls(public_key=public_key, private_key=private_key, domain=domain, log_level=log_level)
