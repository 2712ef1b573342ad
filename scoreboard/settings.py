from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATA_FILE = "www/events.json"
DEFAULT_TIME_ZONE = "America/Los_Angeles"
DEFAULT_LEAGUE = "NFL"
DEFAULT_RETENTION_DAYS = 7
DEFAULT_HTTP_TIMEOUT_SECONDS = 12.0
DEFAULT_ESPN_BASE_URL = "https://site.api.espn.com"
DEFAULT_SPORTSDB_API_VERSION = "1"


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    data_file: Path
    time_zone: str
    default_league: str
    retention_days: int
    http_timeout_seconds: float
    espn_base_url: str
    sportsdb_api_key: str | None
    sportsdb_api_version: str


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def load_settings(env_file: str | os.PathLike | None = None) -> Settings:
    """Read settings from the environment, after loading an optional .env file."""

    load_dotenv(env_file)
    retention_days = _env_int("SCOREBOARD_RETENTION_DAYS", DEFAULT_RETENTION_DAYS)
    if retention_days < 0:
        raise ConfigurationError("SCOREBOARD_RETENTION_DAYS must be >= 0")

    api_key = (os.getenv("SPORTSDB_API_KEY") or "").strip() or None
    return Settings(
        data_file=Path(os.getenv("SCOREBOARD_DATA_FILE") or DEFAULT_DATA_FILE),
        time_zone=(os.getenv("SCOREBOARD_TIME_ZONE") or DEFAULT_TIME_ZONE).strip(),
        default_league=(os.getenv("SCOREBOARD_DEFAULT_LEAGUE") or DEFAULT_LEAGUE).strip().upper(),
        retention_days=retention_days,
        http_timeout_seconds=_env_float(
            "SCOREBOARD_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS
        ),
        espn_base_url=(os.getenv("ESPN_BASE_URL") or DEFAULT_ESPN_BASE_URL).rstrip("/"),
        sportsdb_api_key=api_key,
        sportsdb_api_version=(
            os.getenv("SPORTSDB_API_VERSION") or DEFAULT_SPORTSDB_API_VERSION
        ).strip(),
    )


def require_sportsdb_credentials(settings: Settings) -> tuple[str, str]:
    if not settings.sportsdb_api_key:
        raise ConfigurationError("SPORTSDB_API_KEY is not set in environment variables")
    if not settings.sportsdb_api_version:
        raise ConfigurationError("SPORTSDB_API_VERSION is empty")
    return settings.sportsdb_api_key, settings.sportsdb_api_version
