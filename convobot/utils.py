#!/usr/bin/env python3
"""
Utility functions for the Convo Bot
Time formatting, number formatting and path helpers shared across modules
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import pytz

Number = Union[int, float]

DEFAULT_PROFILE_URL_TEMPLATE = "https://hackforums.net/member.php?action=profile&uid={uid}"


def resolve_path(file_path: str, base_dir: Union[str, Path]) -> str:
    """Resolve a path relative to base_dir, or return it unchanged if absolute.

    Args:
        file_path: Path from the config file.
        base_dir: Directory relative paths are resolved against.

    Returns:
        str: Absolute path.
    """
    path = Path(file_path)
    if path.is_absolute():
        return str(path)
    return str((Path(base_dir) / path).resolve())


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(pytz.utc)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp such as ESPN's ``2024-10-20T17:00Z``.

    Naive results are assumed to be UTC. Returns None for empty or invalid input.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt


def format_time_ago(published: datetime, now: Optional[datetime] = None) -> str:
    """Format the age of a timestamp using its largest whole unit (``3h ago``)"""
    now = now or utc_now()
    seconds = int((now - published).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return f"{max(seconds, 0)}s ago"


def format_countdown(start_time: datetime, now: Optional[datetime] = None) -> Optional[str]:
    """Format time until start_time as ``Xh Ym``, or ``Ym`` under an hour.

    Returns None when start_time is already in the past.
    """
    now = now or utc_now()
    diff = (start_time - now).total_seconds()
    if diff < 0:
        return None

    hours = int(diff // 3600)
    minutes = int((diff % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_number(value: Number) -> str:
    """Render a number without a trailing ``.0`` on whole floats"""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def format_signed(value: Number) -> str:
    """Render a number with an explicit ``+`` on positive values (``+150``, ``-3.5``)"""
    text = format_number(value)
    return f"+{text}" if value > 0 else text


def generate_profile_link(uid: str, template: str = DEFAULT_PROFILE_URL_TEMPLATE) -> str:
    """Build the parenthesised profile link used to address a user in replies"""
    return f"({template.format(uid=uid)})"
