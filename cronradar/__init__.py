"""
Heartbeat SDK for cron job monitoring

This module provides:
- monitor(): execution ping with self-healing auto-registration
- start_job() / complete_job() / fail_job(): lifecycle signals
- wrap(): lifecycle monitoring around any callable
- sync_monitor() / sync_monitors(): explicit pre-registration
- Decorators for monitoring scheduled jobs

The module-level functions read MONITOR_* environment variables on every
call. Use MonitorClient with an explicit MonitorConfig to inject settings.
"""

import functools
from typing import Any, Callable, Dict, List, Optional

from .client import MonitorClient, MonitorOutcome, PingResult
from .config import MonitorConfig, load_env_file, DEFAULT_GRACE_PERIOD
from .decorators import monitor_job, monitor_scheduled_job
from .naming import humanize
from .source import SourceDetector, detect_source

__version__ = '1.0.0'


def monitor(monitor_key: str, schedule: Optional[str] = None) -> None:
    """Record an execution, auto-registering the monitor on 404 if a schedule is given."""
    MonitorClient().monitor(monitor_key, schedule)


def start_job(monitor_key: str, schedule: Optional[str] = None) -> None:
    MonitorClient().start_job(monitor_key, schedule)


def complete_job(monitor_key: str) -> None:
    MonitorClient().complete_job(monitor_key)


def fail_job(monitor_key: str, message: Optional[str] = None) -> None:
    MonitorClient().fail_job(monitor_key, message)


def wrap(monitor_key: str, func: Callable, schedule: Optional[str] = None) -> Callable:
    """
    Wrap a callable with start/complete/fail signals.

    The environment is read when the wrapped callable runs, not when it is
    wrapped. Exceptions from the callable are re-raised unchanged.
    """
    def call(*args, **kwargs) -> Any:
        return MonitorClient().wrap(monitor_key, func, schedule)(*args, **kwargs)

    return functools.wraps(func)(call)


def sync_monitor(monitor_key: str, schedule: str,
                 source: Optional[str] = None,
                 name: Optional[str] = None,
                 grace_period: int = DEFAULT_GRACE_PERIOD) -> None:
    MonitorClient().sync_monitor(monitor_key, schedule, source, name, grace_period)


def sync_monitors(monitors: List[Dict[str, Any]], source: Optional[str] = None) -> None:
    MonitorClient().sync_monitors(monitors, source)


__all__ = [
    'monitor',
    'start_job',
    'complete_job',
    'fail_job',
    'wrap',
    'sync_monitor',
    'sync_monitors',
    'monitor_job',
    'monitor_scheduled_job',
    'humanize',
    'detect_source',
    'MonitorClient',
    'MonitorConfig',
    'MonitorOutcome',
    'PingResult',
    'SourceDetector',
    'load_env_file',
]
