"""
Human-readable monitor names derived from monitor keys.
"""

import re

_INNER_CAPITAL = re.compile(r'(?<!^)([A-Z])')


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def humanize(monitor_key: str) -> str:
    """
    Generate a display name from a monitor key.

    Examples:
        "check-overdue-pings" -> "Check Overdue Pings"
        "check_overdue_pings" -> "Check Overdue Pings"
        "CheckOverduePings"   -> "Check Overdue Pings"
        "backup"              -> "Backup"
    """
    if not monitor_key:
        return monitor_key

    for separator in ('-', '_'):
        if separator in monitor_key:
            parts = monitor_key.lower().split(separator)
            return ' '.join(_capitalize_first(part) for part in parts)

    if monitor_key[0].isupper():
        return _INNER_CAPITAL.sub(r' \1', monitor_key)

    return _capitalize_first(monitor_key)
