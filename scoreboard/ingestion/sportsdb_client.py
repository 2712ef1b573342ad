"""TheSportsDB client: one ``eventsday.php`` request per date window."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from typing import Iterable
from urllib.parse import urlencode

from scoreboard.ingestion.espn_parser import MalformedPayloadError, ScoreboardParser
from scoreboard.ingestion.http_client import DEFAULT_TIMEOUT_SECONDS, FetchError, get_json
from scoreboard.ingestion.schema import Event

logger = logging.getLogger(__name__)
SPORTSDB_BASE_URL = "https://www.thesportsdb.com/api"


def build_events_day_url(api_key: str, api_version: str, day: date, league_key: str) -> str:
    params = urlencode({"d": day.strftime("%Y-%m-%d"), "l": league_key})
    return f"{SPORTSDB_BASE_URL}/v{api_version}/json/{api_key}/eventsday.php?{params}"


def day_windows(today: date | None = None) -> list[date]:
    """Yesterday, today and tomorrow, in that order."""

    base = today or date.today()
    return [base + timedelta(days=offset) for offset in (-1, 0, 1)]


def _fetch_window(url: str, day: date, parser: ScoreboardParser, timeout: float) -> list[Event]:
    label = f"eventsday.php d={day:%Y-%m-%d} l={parser.league}"
    try:
        return parser.parse(get_json(url, timeout=timeout, label=label))
    except (FetchError, MalformedPayloadError) as exc:
        logger.error("Window fetch failed league=%s error=%s", parser.league, exc)
        return []


async def _fetch_all(
    windows: Iterable[tuple[str, date]], parser: ScoreboardParser, timeout: float
) -> list[list[Event]]:
    tasks = [
        asyncio.to_thread(_fetch_window, url, day, parser, timeout)
        for url, day in windows
    ]
    return await asyncio.gather(*tasks)


def fetch_day_windows(
    parser: ScoreboardParser,
    api_key: str,
    api_version: str,
    *,
    today: date | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> list[Event]:
    """Fetch every date window concurrently and concatenate the parsed events.

    A failing window contributes no events instead of aborting the run.
    """

    days = day_windows(today)
    urls = [build_events_day_url(api_key, api_version, day, parser.league) for day in days]
    results = asyncio.run(_fetch_all(zip(urls, days), parser, timeout))
    for day, events in zip(days, results):
        logger.info("Parsed %s events for league=%s date=%s", len(events), parser.league, day)
    return [event for window in results for event in window]
