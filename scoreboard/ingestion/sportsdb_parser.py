"""Parser for TheSportsDB ``eventsday.php`` payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from pydantic import ValidationError

from scoreboard.ingestion.espn_parser import require_events_list
from scoreboard.ingestion.leagues import normalize_league
from scoreboard.ingestion.schema import Event, Team
from scoreboard.ingestion.status import format_event_datetime, format_league_status
from scoreboard.settings import DEFAULT_TIME_ZONE, Settings
from scoreboard.team_logos import league_logo_url

logger = logging.getLogger(__name__)


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class SportsDbDayParser:
    league: str
    time_zone: str = DEFAULT_TIME_ZONE

    def configured(self, settings: Settings) -> SportsDbDayParser:
        return replace(self, time_zone=settings.time_zone)

    def parse(self, payload: Any) -> list[Event]:
        # A day without games comes back as {"events": null}.
        parsed: list[Event] = []
        for raw_event in require_events_list(payload, allow_null=True):
            try:
                event = self.format_event(raw_event)
            except ValidationError as exc:
                logger.debug("Dropping invalid %s entry: %s", self.league, exc)
                continue
            if event is None:
                logger.debug("Dropping %s entry without team data", self.league)
                continue
            parsed.append(event)
        return parsed

    def format_event(self, raw_event: Any) -> Event | None:
        if not isinstance(raw_event, dict):
            return None
        event_id = _text(raw_event.get("idEvent"))
        home_name = _text(raw_event.get("strHomeTeam"))
        away_name = _text(raw_event.get("strAwayTeam"))
        if not event_id or home_name is None or away_name is None:
            return None

        event_date, event_time = format_event_datetime(
            raw_event.get("strTimestamp"), self.time_zone
        )
        raw_status = raw_event.get("strStatus")
        return Event(
            id=event_id,
            date=event_date,
            time=event_time,
            status=format_league_status(self.league, raw_status),
            status_type=_text(raw_status) or "",
            league=self.league,
            league_badge=_text(raw_event.get("strLeagueBadge")) or league_logo_url(self.league),
            team_one=Team(
                id=_text(raw_event.get("idHomeTeam")) or "",
                name=home_name,
                badge=_text(raw_event.get("strHomeTeamBadge")) or "",
                score=raw_event.get("intHomeScore"),
                home_away="home",
            ),
            team_two=Team(
                id=_text(raw_event.get("idAwayTeam")) or "",
                name=away_name,
                badge=_text(raw_event.get("strAwayTeamBadge")) or "",
                score=raw_event.get("intAwayScore"),
                home_away="away",
            ),
        )


def get_day_parser(league_key: str) -> SportsDbDayParser:
    return SportsDbDayParser(league=normalize_league(league_key))
