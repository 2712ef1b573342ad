"""Sync one league's games into the events document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable

from scoreboard.ingestion.espn_client import fetch_scoreboard
from scoreboard.ingestion.espn_parser import MalformedPayloadError, get_parser
from scoreboard.ingestion.leagues import normalize_league
from scoreboard.ingestion.schema import Event
from scoreboard.ingestion.sportsdb_client import fetch_day_windows
from scoreboard.ingestion.sportsdb_parser import get_day_parser
from scoreboard.ingestion.status import resolve_time_zone
from scoreboard.ingestion.store import EventStore, sort_events
from scoreboard.settings import Settings, require_sportsdb_credentials

logger = logging.getLogger(__name__)

Fetcher = Callable[[], list[Event]]


@dataclass
class SyncResult:
    league: str
    source: str
    fetched: int = 0
    total: int = 0


def _espn_fetcher(league: str, settings: Settings, game_date: date | None) -> Fetcher:
    parser = get_parser(league).configured(settings)
    url = parser.scoreboard_url(game_date)

    def fetch() -> list[Event]:
        return parser.parse(fetch_scoreboard(url, timeout=settings.http_timeout_seconds))

    return fetch


def _sportsdb_fetcher(league: str, settings: Settings, game_date: date | None) -> Fetcher:
    parser = get_day_parser(league).configured(settings)
    api_key, api_version = require_sportsdb_credentials(settings)

    def fetch() -> list[Event]:
        return fetch_day_windows(
            parser,
            api_key,
            api_version,
            today=game_date,
            timeout=settings.http_timeout_seconds,
        )

    return fetch


SOURCES: dict[str, Callable[[str, Settings, date | None], Fetcher]] = {
    "espn": _espn_fetcher,
    "sportsdb": _sportsdb_fetcher,
}


def sync_league(
    league_key: str,
    settings: Settings,
    *,
    source: str = "espn",
    game_date: date | None = None,
    now: datetime | None = None,
) -> SyncResult:
    """Fetch, parse and merge one league into the events document.

    Configuration and league errors are raised before any network call. Fetch
    and parse errors are raised before the document is modified.
    """

    league = normalize_league(league_key)
    if source not in SOURCES:
        raise ValueError(f"Unsupported source: {source}. Supported: {', '.join(sorted(SOURCES))}")
    resolve_time_zone(settings.time_zone)
    fetch = SOURCES[source](league, settings, game_date)

    store = EventStore(
        settings.data_file,
        time_zone=settings.time_zone,
        retention=timedelta(days=settings.retention_days),
    )
    document = store.load()

    logger.info("Fetching events for league=%s source=%s", league, source)
    fresh = fetch()
    if not isinstance(fresh, list):
        raise MalformedPayloadError(f"Parser returned {type(fresh).__name__}, expected a list")
    logger.info("Parsed %s events for league=%s", len(fresh), league)

    merged = store.merge(document["events"], fresh, league, now=now)
    document["events"] = sort_events(merged)
    store.persist(document)

    return SyncResult(
        league=league,
        source=source,
        fetched=len(fresh),
        total=len(document["events"]),
    )
