"""
Detection of the host framework a job runs under.

The detected tag is only sent as registration metadata. Marker order is fixed
because server-side analytics are keyed on the resulting value.
"""

import sys
import inspect
import logging
from typing import Callable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MANUAL_SOURCE = 'manual'


def _loaded(module_name: str):
    return sys.modules.get(module_name)


def _is_django() -> bool:
    conf = _loaded('django.conf')
    return conf is not None and bool(conf.settings.configured)


def _is_celery() -> bool:
    # Importing celery (e.g. a Flask app that defines its Celery app) is not
    # enough, a task must be executing
    state = _loaded('celery._state')
    return state is not None and state.get_current_task() is not None


def _is_flask() -> bool:
    flask = _loaded('flask')
    return flask is not None and bool(flask.has_app_context())


DEFAULT_MARKERS: Tuple[Tuple[str, Callable[[], bool]], ...] = (
    ('django', _is_django),
    ('celery', _is_celery),
    ('flask', _is_flask),
)

# Module name prefixes looked up in the call stack when no marker matched
DEFAULT_FRAME_MARKERS: Tuple[Tuple[str, str], ...] = (
    ('django.', 'django-direct'),
    ('celery.', 'celery-direct'),
    ('flask.', 'flask-direct'),
)


class SourceDetector:
    """
    Ordered framework detection.

    Markers are (source, predicate) pairs checked first, in order. Frame
    markers are (module prefix, source) pairs matched against the current
    call stack afterwards. Falls back to "manual".
    """

    def __init__(self,
                 markers: Sequence[Tuple[str, Callable[[], bool]]] = DEFAULT_MARKERS,
                 frame_markers: Sequence[Tuple[str, str]] = DEFAULT_FRAME_MARKERS):
        self.markers = tuple(markers)
        self.frame_markers = tuple(frame_markers)

    def detect(self) -> str:
        """Return the source tag, never raises."""
        for source, predicate in self.markers:
            try:
                if predicate():
                    return source
            except Exception as e:
                logger.debug(f"Source marker {source} failed: {e}")

        try:
            source = self._detect_from_stack()
            if source:
                return source
        except Exception as e:
            logger.debug(f"Stack inspection failed: {e}")

        return MANUAL_SOURCE

    def _detect_from_stack(self) -> Optional[str]:
        frame = inspect.currentframe()
        try:
            while frame is not None:
                module_name = frame.f_globals.get('__name__', '')
                for prefix, source in self.frame_markers:
                    if module_name.startswith(prefix):
                        return source
                frame = frame.f_back
        finally:
            del frame
        return None


def detect_source() -> str:
    """Detect the source with the default markers."""
    return SourceDetector().detect()
