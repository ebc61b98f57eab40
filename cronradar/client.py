"""
HTTP client for the cron monitoring API
"""

import enum
import functools
import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests
from marshmallow import ValidationError

from .config import MonitorConfig, DEFAULT_GRACE_PERIOD
from .exceptions import MissingConfigurationError, ServerError, TransportError
from .naming import humanize
from .schemas import build_sync_payload
from .source import SourceDetector

logger = logging.getLogger(__name__)

USER_AGENT = 'cronradar-python/1.0'


def _describe(exc: BaseException) -> str:
    """Failure message for an exception, never raises"""
    try:
        return str(exc)
    except Exception:
        return type(exc).__name__


class MonitorOutcome(enum.Enum):
    """Terminal state of a monitor() call"""
    DISABLED = 'disabled'
    PINGED = 'pinged'
    NOT_FOUND = 'not_found'
    REGISTERED = 'registered'
    REGISTRATION_FAILED = 'registration_failed'
    UNREACHABLE = 'unreachable'
    FAILED = 'failed'


class PingResult:
    """Status (and raw body) of one ping response"""

    def __init__(self, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    def __repr__(self) -> str:
        return f"PingResult(status_code={self.status_code})"


class MonitorClient:
    """
    Client for the cron monitoring API.

    Every public method swallows monitoring failures so that the calling job
    is never affected. Only wrap() re-raises, and only the wrapped callable's
    own exception.
    """

    def __init__(self, config: Optional[MonitorConfig] = None,
                 detector: Optional[SourceDetector] = None):
        self.config = config or MonitorConfig.from_env()
        self.detector = detector or SourceDetector()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        return {'User-Agent': USER_AGENT}

    def _ping_url(self, monitor_key: str, endpoint: str = '') -> str:
        url = f"{self.config.base_url}/ping/{quote(monitor_key, safe='')}"
        if endpoint:
            url = f"{url}/{endpoint}"
        return url

    def _request(self, method: str, url: str, api_key: str, **kwargs) -> requests.Response:
        """
        Issue a single request, wrapping transport errors in TransportError

        Credentials go through requests' HTTP Basic auth (api_key as user,
        empty password) so that a ~/.netrc entry cannot replace them.
        """
        logger.debug(f"{method} {url}")
        try:
            return requests.request(
                method, url,
                auth=(api_key, ''),
                timeout=self.config.timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e

    def _send_ping(self, monitor_key: str) -> Optional[PingResult]:
        """
        Send a plain execution ping.

        Returns:
            PingResult, or None if the service could not be reached
        """
        api_key = self.config.require_api_key()
        try:
            response = self._request(
                self.config.method,
                self._ping_url(monitor_key),
                api_key,
                headers=self._headers(),
            )
        except TransportError as e:
            logger.warning(f"Ping for monitor '{monitor_key}' failed: {e}")
            return None

        return PingResult(response.status_code, response.text)

    def _send_lifecycle_ping(self, monitor_key: str, endpoint: str,
                             schedule: Optional[str] = None,
                             message: Optional[str] = None) -> bool:
        api_key = self.config.require_api_key()

        params = {}
        if schedule:
            params['schedule'] = schedule
        if message:
            params['message'] = message

        try:
            response = self._request(
                'POST',
                self._ping_url(monitor_key, endpoint),
                api_key,
                headers=self._headers(),
                params=params or None,
            )
        except TransportError as e:
            logger.warning(f"Lifecycle ping '{endpoint}' for monitor '{monitor_key}' failed: {e}")
            return False

        if 200 <= response.status_code < 300:
            return True

        logger.warning(
            f"Lifecycle ping '{endpoint}' for monitor '{monitor_key}' "
            f"returned HTTP {response.status_code}"
        )
        return False

    # ------------------------------------------------------------------
    # Heartbeat with self-healing registration
    # ------------------------------------------------------------------

    def monitor(self, monitor_key: str, schedule: Optional[str] = None) -> MonitorOutcome:
        """
        Record one execution of a job.

        If the monitor is unknown (HTTP 404) and a schedule is given, the
        monitor is registered and pinged once more. There is no further retry.

        Args:
            monitor_key: Key identifying the job
            schedule: Cron expression used for auto-registration

        Returns:
            MonitorOutcome describing how the call ended
        """
        try:
            if not self.config.enabled:
                logger.warning(
                    f"MONITOR_API_KEY environment variable not set. "
                    f"Monitor '{monitor_key}' will not be tracked."
                )
                return MonitorOutcome.DISABLED

            result = self._send_ping(monitor_key)
            if result is None:
                return MonitorOutcome.UNREACHABLE

            if not result.not_found:
                if not result.ok:
                    logger.warning(f"Ping for monitor '{monitor_key}' returned HTTP {result.status_code}")
                return MonitorOutcome.PINGED

            if not schedule:
                logger.debug(f"Monitor '{monitor_key}' not found and no schedule given")
                return MonitorOutcome.NOT_FOUND

            logger.info(
                f"Monitor '{monitor_key}' not found. "
                f"Auto-registering with schedule '{schedule}'..."
            )
            source = self._resolve_source()
            registered = self.sync_monitor(monitor_key, schedule, source=source)
            if not registered:
                logger.warning(f"Auto-registration of monitor '{monitor_key}' failed, pinging once more anyway")

            self._send_ping(monitor_key)
            return MonitorOutcome.REGISTERED if registered else MonitorOutcome.REGISTRATION_FAILED

        except Exception as e:
            logger.error(f"Error during ping of monitor '{monitor_key}': {e}")
            return MonitorOutcome.FAILED

    # ------------------------------------------------------------------
    # Lifecycle signals
    # ------------------------------------------------------------------

    def _lifecycle(self, monitor_key: str, endpoint: str, **params) -> bool:
        try:
            if not self.config.enabled:
                logger.debug(f"Monitoring disabled, skipping '{endpoint}' for monitor '{monitor_key}'")
                return False
            return self._send_lifecycle_ping(monitor_key, endpoint, **params)
        except Exception as e:
            logger.error(f"Error during {endpoint} of monitor '{monitor_key}': {e}")
            return False

    def start_job(self, monitor_key: str, schedule: Optional[str] = None) -> bool:
        """Signal that a job started (hang detection, duration tracking)"""
        return self._lifecycle(monitor_key, 'start', schedule=schedule)

    def complete_job(self, monitor_key: str) -> bool:
        """Signal that a job completed successfully"""
        return self._lifecycle(monitor_key, 'complete')

    def fail_job(self, monitor_key: str, message: Optional[str] = None) -> bool:
        """Signal that a job failed, alerts without waiting for the grace period"""
        return self._lifecycle(monitor_key, 'fail', message=message)

    def wrap(self, monitor_key: str, func: Callable,
             schedule: Optional[str] = None) -> Callable:
        """
        Wrap a callable with start/complete/fail lifecycle signals.

        Exceptions raised by the callable are reported with fail_job and then
        re-raised unchanged.

        Usage:
            backup = client.wrap('backup-job', run_backup)
            backup()
        """
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            self.start_job(monitor_key, schedule)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                self.fail_job(monitor_key, _describe(e))
                raise
            self.complete_job(monitor_key)
            return result

        return wrapper

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _resolve_source(self, source: Optional[str] = None) -> str:
        return source or self.config.source or self.detector.detect()

    def sync_monitors(self, monitors: List[Dict[str, Any]],
                      source: Optional[str] = None) -> bool:
        """
        Register one or more monitors in a single request.

        Args:
            monitors: Dicts with key, schedule and optionally name, grace_period
            source: Source tag, detected if omitted

        Returns:
            True if the service accepted the request, False otherwise
        """
        keys = ', '.join(str(m.get('key')) for m in monitors if isinstance(m, dict))
        try:
            api_key = self.config.require_api_key()

            definitions = []
            for monitor in monitors:
                key = monitor.get('key') or ''
                definitions.append({
                    'key': key,
                    'name': monitor.get('name') or humanize(key),
                    'schedule': monitor.get('schedule'),
                    'grace_period': monitor.get('grace_period') or DEFAULT_GRACE_PERIOD,
                })

            payload = build_sync_payload(self._resolve_source(source), definitions)

            headers = self._headers()
            headers['Content-Type'] = 'application/json'

            response = self._request(
                'POST',
                f"{self.config.base_url}/api/sync",
                api_key,
                json=payload,
                headers=headers,
            )
            if not 200 <= response.status_code < 300:
                raise ServerError(f"HTTP {response.status_code}", response.status_code)

            logger.info(f"Monitor '{keys}' synced successfully.")
            return True

        except MissingConfigurationError:
            logger.warning(
                f"MONITOR_API_KEY environment variable not set. "
                f"Monitor '{keys}' will not be synced."
            )
        except ValidationError as e:
            logger.warning(f"Invalid monitor definition for '{keys}': {e.messages}")
        except (TransportError, ServerError) as e:
            logger.warning(f"Failed to sync monitor '{keys}': {e}")
        except Exception as e:
            logger.error(f"Error syncing monitor '{keys}': {e}")

        return False

    def sync_monitor(self, monitor_key: str, schedule: str,
                     source: Optional[str] = None,
                     name: Optional[str] = None,
                     grace_period: int = DEFAULT_GRACE_PERIOD) -> bool:
        """
        Pre-register a monitor so the service knows when the job should run.

        Args:
            monitor_key: Unique key of the monitor
            schedule: Cron expression of the job
            source: Source framework, detected if omitted
            name: Display name, generated from the key if omitted
            grace_period: Seconds to wait past the expected run before alerting

        Returns:
            True on success, False otherwise
        """
        return self.sync_monitors(
            [{
                'key': monitor_key,
                'name': name,
                'schedule': schedule,
                'grace_period': grace_period,
            }],
            source=source,
        )
