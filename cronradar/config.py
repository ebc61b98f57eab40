"""
Configuration for the monitoring client.

Settings come from environment variables with sensible defaults:

- MONITOR_API_KEY: API key (required, monitoring is disabled without it)
- MONITOR_BASE_URL: root URL of the monitoring service
- MONITOR_METHOD: HTTP method used for plain pings
- MONITOR_SOURCE: explicit source tag, skips framework detection
"""

import os
import logging
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import MissingConfigurationError

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = 'https://cron.life'
DEFAULT_METHOD = 'GET'
DEFAULT_TIMEOUT = 5  # seconds, hard cap per request
DEFAULT_GRACE_PERIOD = 60  # seconds


class MonitorConfig:
    """Connection settings for one MonitorClient."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        method: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        source: Optional[str] = None,
    ):
        self.api_key = api_key or None
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip('/')
        self.method = (method or DEFAULT_METHOD).upper()
        self.timeout = timeout
        self.source = source or None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'MonitorConfig':
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            MonitorConfig populated from MONITOR_* variables
        """
        if environ is None:
            environ = os.environ

        return cls(
            api_key=environ.get('MONITOR_API_KEY', '').strip(),
            base_url=environ.get('MONITOR_BASE_URL', '').strip(),
            method=environ.get('MONITOR_METHOD', '').strip(),
            source=environ.get('MONITOR_SOURCE', '').strip(),
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        """Return the API key or raise MissingConfigurationError."""
        if not self.api_key:
            raise MissingConfigurationError('MONITOR_API_KEY environment variable not set')
        return self.api_key

    def __repr__(self) -> str:
        return (
            f"MonitorConfig(base_url={self.base_url!r}, method={self.method!r}, "
            f"timeout={self.timeout}, enabled={self.enabled})"
        )


def load_env_file(path: str = '.env') -> bool:
    """
    Load MONITOR_* variables from a dotenv file into the process environment.

    Variables already set in the environment are kept.

    Returns:
        True if the file existed and was loaded
    """
    if not os.path.exists(path):
        logger.warning(f"Env file {path} not found, using process environment only")
        return False

    loaded = load_dotenv(path, override=False)
    logger.debug(f"Loaded environment from {path}")
    return loaded
