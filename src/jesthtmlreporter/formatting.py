"""Text helpers shared by the renderer."""
from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Callable, Optional

# Matches CSI/OSC terminal escape sequences (colors, cursor movement, links).
ANSI_PATTERN = re.compile(
    "[\u001b\u009b][\\[\\]()#;?]*"
    "(?:(?:(?:(?:;[-a-zA-Z\\d/#&.:=?%@~_]+)*"
    "|[a-zA-Z\\d]+(?:;[-a-zA-Z\\d/#&.:=?%@~_]*)*)?\u0007)"
    "|(?:(?:\\d{1,4}(?:;\\d{0,4})*)?[\\dA-PR-TZcf-ntqry=><~]))"
)


def strip_ansi(text: Optional[str]) -> str:
    """Remove ANSI escape sequences from captured terminal output."""
    if not text:
        return ""
    return ANSI_PATTERN.sub("", str(text))


def format_seconds(ms: float) -> str:
    """Milliseconds as seconds, printed the way JavaScript prints numbers.

    ``120 -> "0.12"``, ``2000 -> "2"``, ``1500 -> "1.5"``.
    """
    seconds = ms / 1000
    if math.isfinite(seconds) and seconds == int(seconds):
        return str(int(seconds))
    return repr(seconds)


DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def _ordinal_suffix(day: int) -> str:
    if day % 100 in (11, 12, 13):
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _hour12(dt: datetime) -> int:
    return dt.hour % 12 or 12


# dateformat-style mask tokens ("yyyy-mm-dd HH:MM:ss")
DATE_TOKENS: dict[str, Callable[[datetime], str]] = {
    "d": lambda dt: str(dt.day),
    "dd": lambda dt: f"{dt.day:02d}",
    "ddd": lambda dt: DAY_NAMES[dt.weekday()][:3],
    "dddd": lambda dt: DAY_NAMES[dt.weekday()],
    "m": lambda dt: str(dt.month),
    "mm": lambda dt: f"{dt.month:02d}",
    "mmm": lambda dt: MONTH_NAMES[dt.month - 1][:3],
    "mmmm": lambda dt: MONTH_NAMES[dt.month - 1],
    "yy": lambda dt: f"{dt.year % 100:02d}",
    "yyyy": lambda dt: str(dt.year),
    "h": lambda dt: str(_hour12(dt)),
    "hh": lambda dt: f"{_hour12(dt):02d}",
    "H": lambda dt: str(dt.hour),
    "HH": lambda dt: f"{dt.hour:02d}",
    "M": lambda dt: str(dt.minute),
    "MM": lambda dt: f"{dt.minute:02d}",
    "s": lambda dt: str(dt.second),
    "ss": lambda dt: f"{dt.second:02d}",
    "l": lambda dt: f"{dt.microsecond // 1000:03d}",
    "L": lambda dt: f"{dt.microsecond // 10000:02d}",
    "t": lambda dt: "a" if dt.hour < 12 else "p",
    "tt": lambda dt: "am" if dt.hour < 12 else "pm",
    "T": lambda dt: "A" if dt.hour < 12 else "P",
    "TT": lambda dt: "AM" if dt.hour < 12 else "PM",
    "S": lambda dt: _ordinal_suffix(dt.day),
}

DATE_TOKEN_PATTERN = re.compile(r"d{1,4}|m{1,4}|yy(?:yy)?|([HhMsTt])\1?|[LlS]|\"[^\"]*\"|'[^']*'")


def format_datetime(dt: datetime, pattern: str) -> str:
    """Format with a strftime pattern (contains ``%``) or a dateformat mask."""
    if "%" in pattern:
        return dt.strftime(pattern)

    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token[0] in "\"'":
            return token[1:-1]
        return DATE_TOKENS[token](dt)

    return DATE_TOKEN_PATTERN.sub(replace, pattern)


def format_timestamp(timestamp_ms: float, pattern: str) -> str:
    """Format an epoch-milliseconds timestamp in local time."""
    return format_datetime(datetime.fromtimestamp(timestamp_ms / 1000), pattern)
