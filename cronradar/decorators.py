"""
Decorators for monitoring scheduled jobs
"""

import time
import functools
import logging
from typing import Optional, Callable, Any

from .client import MonitorClient

logger = logging.getLogger(__name__)


def monitor_job(monitor_key: Optional[str] = None,
                schedule: Optional[str] = None,
                log_execution: bool = True):
    """
    Decorator sending start/complete/fail lifecycle signals around a job

    Args:
        monitor_key: Key of the monitor, defaults to the function name
        schedule: Cron expression forwarded with the start signal
        log_execution: Log execution time of the job

    Usage:
        @monitor_job('nightly-backup', schedule='0 2 * * *')
        def nightly_backup():
            pass
    """
    def decorator(func: Callable) -> Callable:
        key = monitor_key or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            # Configuration is read at call time so key rotation needs no restart
            client = MonitorClient()
            start_time = time.time()
            try:
                result = client.wrap(key, func, schedule)(*args, **kwargs)
            except Exception as e:
                if log_execution:
                    logger.error(
                        "Job %s failed after %.2fs: %s",
                        key, time.time() - start_time, e
                    )
                raise

            if log_execution:
                logger.info("Job %s completed in %.2fs", key, time.time() - start_time)
            return result

        return wrapper
    return decorator


def monitor_scheduled_job(monitor_key: str, schedule: Optional[str] = None):
    """
    Decorator sending a self-healing heartbeat after each successful run

    The monitor is registered with `schedule` the first time the service
    reports it as unknown. Failed runs send nothing, the service alerts once
    the grace period expires.

    Usage:
        @monitor_scheduled_job('cleanup-tokens', schedule='0 2 * * *')
        def cleanup_tokens():
            pass
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            result = func(*args, **kwargs)
            MonitorClient().monitor(monitor_key, schedule)
            return result

        return wrapper
    return decorator
