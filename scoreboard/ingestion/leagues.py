"""Supported leagues mapping for ESPN endpoints."""

LEAGUE_PATHS: dict[str, str] = {
    "NFL": "sports/football/nfl",
    "NBA": "sports/basketball/nba",
    "MLB": "sports/baseball/mlb",
}


class UnsupportedLeagueError(ValueError):
    pass


def get_league_path(league_key: str) -> str | None:
    """Return ESPN path segment for a league key (e.g., NBA).

    Returns None when the league is not supported.
    """

    return LEAGUE_PATHS.get(league_key.strip().upper())


def normalize_league(raw: str) -> str:
    value = raw.strip().upper()
    if value not in LEAGUE_PATHS:
        supported = ", ".join(sorted(LEAGUE_PATHS))
        raise UnsupportedLeagueError(
            f'League ID "{value}" is not supported. Supported leagues: {supported}'
        )
    return value
