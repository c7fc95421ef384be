"""
Send-state tracking for Sysmon Core.

Remembers when the daily report was last delivered, so a host sends at
most one report per calendar day. Only the timestamp is stored.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "last-sent"

# Default locations for the state file (in order of preference)
DEFAULT_STATE_PATHS = [
    Path("/var/lib/sysmon-core") / STATE_FILE_NAME,  # System-wide
    Path.home() / ".local" / "state" / "sysmon-core" / STATE_FILE_NAME,  # User-specific
    Path("sysmon-last-sent"),  # Current directory (fallback)
]


def _get_state_path(state_dir: str | None = None) -> Path:
    """
    Determine where the last-sent timestamp is stored.

    Args:
        state_dir: Optional directory from config.

    Returns:
        Path to the state file.
    """
    if state_dir:
        return Path(state_dir) / STATE_FILE_NAME

    for path in DEFAULT_STATE_PATHS:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return path
        except OSError:
            continue

    return Path("sysmon-last-sent")


def get_last_sent(state_dir: str | None = None) -> datetime | None:
    """
    Read the timestamp of the last successful send.

    Returns:
        Aware datetime of the last send, or None if nothing was recorded
        or the record is unreadable.
    """
    path = _get_state_path(state_dir)
    if not path.exists():
        logger.debug("No previous send recorded")
        return None

    try:
        last_sent = datetime.fromisoformat(path.read_text().strip())
    except (ValueError, OSError) as e:
        logger.warning(f"Invalid or unreadable send-state file {path}: {e}")
        return None

    if last_sent.tzinfo is None:
        last_sent = last_sent.replace(tzinfo=timezone.utc)
    logger.debug(f"Last send found: {last_sent.isoformat()}")
    return last_sent


def update_last_sent(state_dir: str | None = None, when: datetime | None = None) -> datetime:
    """
    Record a successful send.

    Args:
        state_dir: Optional directory from config.
        when: Send time; defaults to now (UTC).

    Returns:
        The recorded timestamp.
    """
    when = when or datetime.now(timezone.utc)
    path = _get_state_path(state_dir)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(when.isoformat())
        logger.debug(f"Last send timestamp updated: {when.isoformat()}")
    except OSError as e:
        logger.warning(f"Failed to write send-state file {path}: {e}")

    return when


def sent_today(state_dir: str | None = None, now: datetime | None = None) -> bool:
    """Return True if the last send happened on today's local date."""
    last_sent = get_last_sent(state_dir)
    if last_sent is None:
        return False

    now = now or datetime.now().astimezone()
    return last_sent.astimezone(now.tzinfo).date() == now.date()
