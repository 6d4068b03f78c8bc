# client/hooddeals/utils/time_utils.py

from datetime import datetime
from typing import Optional

import pytz

from hooddeals.core.config_loader import settings


def display_tz():
    return pytz.timezone(settings.DISPLAY_TIMEZONE)


def parse_timestamp(text: Optional[str]) -> Optional[datetime]:
    """
    Accepts backend timestamps like:
    - 2025-03-12T10:15:00Z
    - 2025-03-12T10:15:00.123+00:00
    - 2025-03-12T10:15:00 (naive, taken as UTC)
    """
    if not text:
        return None

    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt


def format_timestamp(text: Optional[str], empty: str = "No messages yet") -> str:
    dt = parse_timestamp(text)
    if dt is None:
        return empty if not text else text
    return dt.astimezone(display_tz()).strftime("%Y-%m-%d %H:%M")
