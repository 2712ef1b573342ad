"""ESPN HTTP client for fetching scoreboards."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any
from urllib.parse import urlencode

from scoreboard.ingestion.http_client import DEFAULT_TIMEOUT_SECONDS, get_json
from scoreboard.ingestion.leagues import UnsupportedLeagueError, get_league_path
from scoreboard.settings import DEFAULT_ESPN_BASE_URL

logger = logging.getLogger(__name__)


def normalize_dates(value: str | date | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime("%Y%m%d")
    cleaned = value.strip()
    if not cleaned:
        return None
    if cleaned.lower() == "today":
        return date.today().strftime("%Y%m%d")
    if re.fullmatch(r"\d{8}", cleaned):
        return cleaned
    if re.fullmatch(r"\d{4}-\d{2}-\d{2}", cleaned):
        return cleaned.replace("-", "")
    raise ValueError("dates must be YYYYMMDD or YYYY-MM-DD")


def build_scoreboard_url(
    league_key: str,
    dates: str | date | None = None,
    base_url: str = DEFAULT_ESPN_BASE_URL,
) -> str:
    league_path = get_league_path(league_key)
    if league_path is None:
        raise UnsupportedLeagueError(f"Unsupported league key: {league_key}")

    url = f"{base_url.rstrip('/')}/apis/site/v2/{league_path}/scoreboard"
    normalized_dates = normalize_dates(dates)
    if normalized_dates:
        return f"{url}?{urlencode({'dates': normalized_dates})}"
    return url


def fetch_scoreboard(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """Fetch one ESPN scoreboard payload. Errors propagate as FetchError."""

    logger.info("Fetching scoreboard url=%s", url)
    payload = get_json(url, timeout=timeout)
    events = payload.get("events") if isinstance(payload, dict) else None
    logger.info(
        "Fetched scoreboard url=%s events=%s",
        url,
        len(events) if isinstance(events, list) else "n/a",
    )
    return payload
