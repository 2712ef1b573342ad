"""JSON events document shared by every league's runs."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterable

from scoreboard.ingestion.schema import Event
from scoreboard.ingestion.status import is_final_status, parse_display_datetime
from scoreboard.settings import DEFAULT_RETENTION_DAYS, DEFAULT_TIME_ZONE

logger = logging.getLogger(__name__)


def _sort_key(event: dict[str, Any]) -> tuple[str, str, str]:
    return (
        str(event.get("league") or ""),
        str(event.get("date") or ""),
        str(event.get("time") or ""),
    )


def sort_events(events: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Stable sort by (league, date, time), each compared as a plain string."""

    return sorted(events, key=_sort_key)


class EventStore:
    """Load, reconcile and rewrite the events document.

    Merging uses the preserve-recent-final policy: a league's stored entries
    are replaced by the fresh fetch, except that final games from the last
    ``retention`` window survive when the upstream feed no longer lists them.
    Entries of other leagues are never touched.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        time_zone: str = DEFAULT_TIME_ZONE,
        retention: timedelta = timedelta(days=DEFAULT_RETENTION_DAYS),
    ) -> None:
        self.path = Path(path)
        self.time_zone = time_zone
        self.retention = retention

    def load(self) -> dict[str, Any]:
        try:
            with self.path.open(encoding="utf-8") as fh:
                document = json.load(fh)
        except FileNotFoundError:
            logger.info("Events file %s not found, creating it", self.path)
        except (OSError, ValueError) as exc:
            logger.warning("Events file %s unreadable (%s), reinitializing", self.path, exc)
        else:
            if isinstance(document, dict) and isinstance(document.get("events"), list):
                return document
            logger.warning("Events file %s has an unexpected shape, reinitializing", self.path)

        document = {"events": []}
        self.persist(document)
        return document

    def persist(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(document, fh, ensure_ascii=False, separators=(",", ":"))

    def retained_finals(
        self,
        events: Iterable[dict[str, Any]],
        league: str,
        now: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Final events of *league* inside the retention window.

        Entries whose date cannot be parsed are kept.
        """

        cutoff = (now or datetime.now(timezone.utc)) - self.retention
        retained: list[dict[str, Any]] = []
        for event in events:
            if event.get("league") != league or not is_final_status(event.get("status_type")):
                continue
            started = parse_display_datetime(event.get("date"), event.get("time"), self.time_zone)
            if started is None or started >= cutoff:
                retained.append(event)
        return retained

    def merge(
        self,
        events: list[dict[str, Any]],
        fresh: Iterable[Event | dict[str, Any]],
        league: str,
        now: datetime | None = None,
    ) -> list[dict[str, Any]]:
        league = league.upper()
        others = [event for event in events if event.get("league") != league]
        retained = self.retained_finals(events, league, now)

        # Last occurrence wins, first position is kept.
        fresh_by_id: dict[str, dict[str, Any]] = {}
        for item in fresh:
            record = item.to_document() if isinstance(item, Event) else dict(item)
            fresh_by_id[str(record.get("id"))] = record

        restored = [event for event in retained if str(event.get("id")) not in fresh_by_id]
        if restored:
            logger.info(
                "Keeping %s recent final %s events missing from the feed",
                len(restored),
                league,
            )
        return others + list(fresh_by_id.values()) + restored
