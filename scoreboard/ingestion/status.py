"""Display formatting for upstream timestamps and status codes."""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from functools import lru_cache
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from scoreboard.settings import DEFAULT_TIME_ZONE, ConfigurationError

DISPLAY_DATE_FORMAT = "%b %d %Y"  # "Oct 05 2025"
DISPLAY_TIME_FORMAT = "%I:%M %p"  # "06:30 PM"

# Per-league display strings for the TheSportsDB strStatus vocabulary.
LEAGUE_STATUS_MAP: dict[str, dict[str, str]] = {
    "MLB": {
        "NS": "Not Started",
        "IN1": "Inning 1",
        "IN2": "Inning 2",
        "IN3": "Inning 3",
        "IN4": "Inning 4",
        "IN5": "Inning 5",
        "IN6": "Inning 6",
        "IN7": "Inning 7",
        "IN8": "Inning 8",
        "IN9": "Inning 9",
        "POST": "Postponed",
        "CANC": "Cancelled",
        "INTR": "Interrupted",
        "ABD": "Abandoned",
        "FT": "Finished",
    },
    "NBA": {
        "NS": "Not Started",
        "Q1": "Quarter 1 (In Play)",
        "Q2": "Quarter 2 (In Play)",
        "Q3": "Quarter 3 (In Play)",
        "Q4": "Quarter 4 (In Play)",
        "OT": "Over Time (In Play)",
        "BT": "Break Time (In Play)",
        "HT": "Halftime (In Play)",
        "FT": "Game Finished",
        "AOT": "After Over Time",
        "POST": "Game Postponed",
        "CANC": "Game Cancelled",
        "SUSP": "Game Suspended",
        "AWD": "Game Awarded",
        "ABD": "Game Abandoned",
    },
    "NFL": {
        "NS": "Not Started",
        "Q1": "1st Quarter",
        "Q2": "2nd Quarter",
        "Q3": "3rd Quarter",
        "Q4": "4th Quarter",
        "OT": "Overtime",
        "HT": "Halftime",
        "FT": "Finished",
        "AOT": "After Over Time",
        "CANC": "Cancelled",
        "PST": "Postponed",
    },
}

# Top-level ESPN status names with a fixed display string.
ESPN_STATUS_NAMES: dict[str, str] = {
    "STATUS_SCHEDULED": "Scheduled",
    "STATUS_FINAL": "Final",
    "STATUS_CANCELED": "Canceled",
}
ESPN_IN_PROGRESS = "STATUS_IN_PROGRESS"

FINAL_STATUS_TYPES = frozenset({"STATUS_FINAL", "FT", "AOT"})

_OFFSET_WITHOUT_COLON = re.compile(r"([+\-]\d{2})(\d{2})$")


@lru_cache(maxsize=None)
def resolve_time_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown time zone: {name}") from exc


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an upstream ISO timestamp; values without an offset are UTC."""

    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    if cleaned[-1] in "zZ":
        cleaned = cleaned[:-1] + "+00:00"
    elif "T" in cleaned:
        cleaned = _OFFSET_WITHOUT_COLON.sub(r"\1:\2", cleaned)
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_event_datetime(
    timestamp: Any, time_zone: str = DEFAULT_TIME_ZONE
) -> tuple[str, str]:
    """Render an upstream timestamp as ("Mon DD YYYY", "hh:mm AM") in *time_zone*.

    Empty or malformed input yields ("", "").
    """

    instant = parse_timestamp(timestamp)
    if instant is None:
        return "", ""
    zone = resolve_time_zone(time_zone)
    try:
        local = instant.astimezone(zone)
        return local.strftime(DISPLAY_DATE_FORMAT), local.strftime(DISPLAY_TIME_FORMAT)
    except (OverflowError, ValueError):
        return "", ""


def parse_display_datetime(
    date_value: Any, time_value: Any, time_zone: str = DEFAULT_TIME_ZONE
) -> datetime | None:
    """Inverse of format_event_datetime. Returns None when unparseable."""

    if not isinstance(date_value, str) or not date_value.strip():
        return None
    zone = resolve_time_zone(time_zone)
    try:
        if isinstance(time_value, str) and time_value.strip():
            parsed = datetime.strptime(
                f"{date_value.strip()} {time_value.strip()}",
                f"{DISPLAY_DATE_FORMAT} {DISPLAY_TIME_FORMAT}",
            )
        else:
            parsed = datetime.strptime(date_value.strip(), DISPLAY_DATE_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=zone)


def format_league_status(league: str, code: Any) -> str:
    if code is None:
        return ""
    code = str(code)
    return LEAGUE_STATUS_MAP.get(league.upper(), {}).get(code, code)


def format_espn_status(status: Any) -> tuple[str, str]:
    """Return (display status, status_type) for an ESPN event status block."""

    status_type = status.get("type") if isinstance(status, dict) else None
    if not isinstance(status_type, dict):
        return "", ""
    name = status_type.get("name")
    detail = status_type.get("detail")
    name = name if isinstance(name, str) else ""
    detail = detail if isinstance(detail, str) else ""
    if name in ESPN_STATUS_NAMES:
        return ESPN_STATUS_NAMES[name], name
    if name == ESPN_IN_PROGRESS:
        return detail or "In Progress", name
    return detail or name, name


def is_final_status(status_type: Any) -> bool:
    return isinstance(status_type, str) and status_type.upper() in FINAL_STATUS_TYPES
