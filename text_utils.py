"""
text_utils.py
Small text helpers used when turning feed events into iCalendar lines.
"""
from __future__ import annotations

import re
from typing import Tuple

TAG_RE = re.compile(r"<[^>]*>")
UTC_LAYOUT = "{:04}{:02}{:02}T{:02}{:02}{:02}Z"
SECONDS_PER_DAY = 86400


def strip_tags(text: str) -> str:
    """Drop anything that looks like an HTML/XML tag, keep the text between.

    Entities such as ``&amp;`` are left untouched and an unclosed ``<`` is
    kept as plain text.
    """
    if not text:
        return ""
    return TAG_RE.sub("", text)


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Proleptic Gregorian (year, month, day) for a day count since 1970-01-01.

    Plain integer arithmetic, so it has no year range limit.
    """
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def format_utc(ms: int) -> str:
    """Render a millisecond epoch as ``YYYYMMDDTHHMMSSZ``.

    Milliseconds are truncated toward zero.  Years past 9999 simply get
    more digits.
    """
    seconds = ms // 1000 if ms >= 0 else -(-ms // 1000)
    days, rem = divmod(seconds, SECONDS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, rem = divmod(rem, 3600)
    minute, second = divmod(rem, 60)
    return UTC_LAYOUT.format(year, month, day, hour, minute, second)
