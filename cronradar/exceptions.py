"""
Exceptions raised inside the monitoring client.

None of these escape the public API: every entry point catches them and logs.
"""

from typing import Optional


class CronRadarError(Exception):
    """Base exception for monitoring client errors."""
    pass


class MissingConfigurationError(CronRadarError):
    """No API key configured, monitoring is disabled."""
    pass


class TransportError(CronRadarError):
    """Network failure (DNS, connection refused, timeout...)."""
    pass


class ServerError(CronRadarError):
    """Monitoring API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
