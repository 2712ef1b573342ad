"""Normalized event record written to the events document."""

import re
from typing import Any, Literal, Optional

from pydantic import BaseModel, field_validator

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_score(value: Any) -> int:
    """Leading-integer parse of an upstream score; anything else is 0."""

    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    match = _LEADING_INT.match(str(value))
    if match is None:
        return 0
    return int(match.group(1))


class Team(BaseModel):
    id: str
    name: str
    badge: str = ""
    score: int = 0

    # Optional fields
    abbreviation: Optional[str] = None
    location: Optional[str] = None
    home_away: Optional[Literal["home", "away"]] = None

    @field_validator("score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> int:
        return parse_score(value)


class Event(BaseModel):
    """
    One game as displayed by the kiosk, independent of the upstream provider.
    """

    id: str
    date: str
    time: str
    status: str
    status_type: str = ""
    league: str
    league_badge: str = ""
    team_one: Team
    team_two: Team

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
