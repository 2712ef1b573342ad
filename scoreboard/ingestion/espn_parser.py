"""Parser for ESPN scoreboard payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Protocol

from pydantic import ValidationError

from scoreboard.ingestion.espn_client import build_scoreboard_url
from scoreboard.ingestion.leagues import normalize_league
from scoreboard.ingestion.schema import Event, Team
from scoreboard.ingestion.status import format_espn_status, format_event_datetime
from scoreboard.settings import DEFAULT_ESPN_BASE_URL, DEFAULT_TIME_ZONE, Settings
from scoreboard.team_logos import league_logo_url, team_logo_url

logger = logging.getLogger(__name__)


class MalformedPayloadError(ValueError):
    pass


class ScoreboardParser(Protocol):
    """Anything that turns one raw upstream response into normalized events."""

    league: str

    def parse(self, payload: Any) -> list[Event]: ...


def require_events_list(payload: Any, *, allow_null: bool = False) -> list[Any]:
    """Return the top-level ``events`` array or raise MalformedPayloadError."""

    if not isinstance(payload, dict):
        raise MalformedPayloadError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    events = payload.get("events")
    if events is None and allow_null:
        return []
    if not isinstance(events, list):
        raise MalformedPayloadError("Response has no 'events' array")
    return events


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class EspnLeagueParser:
    league: str
    league_badge: str
    # Optional Team fields this league's display shows.
    team_fields: frozenset[str] = frozenset()
    time_zone: str = DEFAULT_TIME_ZONE
    base_url: str = DEFAULT_ESPN_BASE_URL

    @property
    def url(self) -> str:
        return build_scoreboard_url(self.league, base_url=self.base_url)

    def scoreboard_url(self, dates: str | date | None = None) -> str:
        return build_scoreboard_url(self.league, dates, base_url=self.base_url)

    def configured(self, settings: Settings) -> EspnLeagueParser:
        return replace(
            self, time_zone=settings.time_zone, base_url=settings.espn_base_url
        )

    def parse(self, payload: Any) -> list[Event]:
        parsed: list[Event] = []
        for raw_event in require_events_list(payload):
            try:
                event = self.format_event(raw_event)
            except ValidationError as exc:
                logger.debug("Dropping invalid %s entry: %s", self.league, exc)
                continue
            if event is None:
                logger.debug(
                    "Dropping %s entry without competition data id=%s",
                    self.league,
                    raw_event.get("id") if isinstance(raw_event, dict) else None,
                )
                continue
            parsed.append(event)
        return parsed

    def format_event(self, raw_event: Any) -> Event | None:
        if not isinstance(raw_event, dict):
            return None
        event_id = _text(raw_event.get("id"))
        if not event_id:
            return None

        competitions = raw_event.get("competitions")
        if not isinstance(competitions, list) or not competitions:
            return None
        competition = competitions[0]
        if not isinstance(competition, dict):
            return None
        competitors = competition.get("competitors")
        if not isinstance(competitors, list) or len(competitors) < 2:
            return None

        team_one = self._format_team(competitors[0])
        team_two = self._format_team(competitors[1])
        if team_one is None or team_two is None:
            return None

        event_date, event_time = format_event_datetime(raw_event.get("date"), self.time_zone)
        status, status_type = format_espn_status(raw_event.get("status"))
        return Event(
            id=event_id,
            date=event_date,
            time=event_time,
            status=status,
            status_type=status_type,
            league=self.league,
            league_badge=self.league_badge,
            team_one=team_one,
            team_two=team_two,
        )

    def _format_team(self, competitor: Any) -> Team | None:
        if not isinstance(competitor, dict):
            return None
        team = competitor.get("team")
        if not isinstance(team, dict):
            return None

        name = _text(team.get("name") or team.get("displayName"))
        if not name:
            return None
        abbreviation = _text(team.get("abbreviation"))
        home_away = competitor.get("homeAway")
        return Team(
            id=_text(team.get("id")) or "",
            name=name,
            badge=_text(team.get("logo")) or team_logo_url(self.league, abbreviation),
            score=competitor.get("score"),
            abbreviation=abbreviation if "abbreviation" in self.team_fields else None,
            location=(
                _text(team.get("location")) if "location" in self.team_fields else None
            ),
            home_away=home_away if home_away in ("home", "away") else None,
        )


PARSERS: dict[str, EspnLeagueParser] = {
    "NFL": EspnLeagueParser(
        league="NFL",
        league_badge=league_logo_url("NFL"),
    ),
    "NBA": EspnLeagueParser(
        league="NBA",
        league_badge=league_logo_url("NBA"),
        team_fields=frozenset({"location"}),
    ),
    "MLB": EspnLeagueParser(
        league="MLB",
        league_badge=league_logo_url("MLB"),
        team_fields=frozenset({"abbreviation", "location"}),
    ),
}


def get_parser(league_key: str) -> EspnLeagueParser:
    """Return the registered parser for a league key (case-insensitive)."""

    return PARSERS[normalize_league(league_key)]
