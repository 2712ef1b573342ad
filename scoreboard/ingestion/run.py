"""CLI entrypoint for scheduled (cron) event refreshes."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

from scoreboard.ingestion.espn_parser import MalformedPayloadError
from scoreboard.ingestion.http_client import FetchError
from scoreboard.ingestion.leagues import LEAGUE_PATHS, UnsupportedLeagueError
from scoreboard.ingestion.sync import SOURCES, sync_league
from scoreboard.settings import ConfigurationError, load_settings

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Refresh the events document for one league.",
    )
    parser.add_argument(
        "league",
        nargs="?",
        help=f"League key, case-insensitive ({', '.join(LEAGUE_PATHS)}). "
        "Defaults to SCOREBOARD_DEFAULT_LEAGUE or NFL.",
    )
    parser.add_argument(
        "--source",
        choices=sorted(SOURCES),
        default="espn",
        help="Upstream provider (default: espn).",
    )
    parser.add_argument(
        "--date",
        type=str,
        help="Date in YYYY-MM-DD format. Scoreboard day for espn, "
        "center of the three-day window for sportsdb (default: today).",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        help="Path of the events JSON document (overrides SCOREBOARD_DATA_FILE).",
    )
    parser.add_argument(
        "--time-zone",
        type=str,
        help="IANA display time zone (overrides SCOREBOARD_TIME_ZONE).",
    )
    return parser.parse_args(argv)


def _resolve_date(raw: str | None) -> date | None:
    if not raw:
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError as exc:
        raise SystemExit(f"Invalid --date {raw!r}: expected YYYY-MM-DD") from exc


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    args = _parse_args(argv)
    game_date = _resolve_date(args.date)
    try:
        settings = load_settings()
        if args.data_file:
            settings = replace(settings, data_file=args.data_file)
        if args.time_zone:
            settings = replace(settings, time_zone=args.time_zone)
        league = args.league or settings.default_league

        result = sync_league(league, settings, source=args.source, game_date=game_date)
    except (ConfigurationError, UnsupportedLeagueError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc
    except (FetchError, MalformedPayloadError) as exc:
        logger.error("Script failed: %s", exc)
        raise SystemExit(1) from exc
    except OSError as exc:
        logger.error("Could not write events file: %s", exc)
        raise SystemExit(1) from exc
    except Exception as exc:
        logger.exception("Script failed")
        raise SystemExit(1) from exc

    logger.info(
        "Successfully updated events for %s: fetched=%s total=%s file=%s",
        result.league,
        result.fetched,
        result.total,
        settings.data_file,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
