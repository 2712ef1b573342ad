"""League and team badge URLs on the ESPN CDN."""

# ESPN CDN base URL for team logos
_ESPN_LOGO_BASE = "https://a.espncdn.com/i/teamlogos"

# League-level badges shown next to every event of that league
_LEAGUE_LOGOS: dict[str, str] = {
    "NFL": "https://a.espncdn.com/i/teamlogos/leagues/500-dark/nfl.png",
    "NBA": "https://a.espncdn.com/i/teamlogos/leagues/500/nba.png",
    "MLB": "https://a.espncdn.com/i/teamlogos/leagues/500/mlb.png",
}


def team_logo_url(league: str, abbreviation: str | None, size: int = 500) -> str:
    """Return ESPN CDN logo URL for a team abbreviation (e.g. ``KC``).

    Returns an empty string when there is no abbreviation to build from.
    """
    if not abbreviation:
        return ""
    return f"{_ESPN_LOGO_BASE}/{league.lower()}/{size}/{abbreviation.lower()}.png"


def league_logo_url(league: str) -> str:
    """Return ESPN CDN logo URL for a league (NFL, NBA, MLB)."""
    return _LEAGUE_LOGOS.get(league.upper(), "")
