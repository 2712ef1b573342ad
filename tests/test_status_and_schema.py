from __future__ import annotations

import unittest
from datetime import datetime, timezone

from scoreboard.ingestion.schema import Team, parse_score
from scoreboard.ingestion.status import (
    format_espn_status,
    format_event_datetime,
    format_league_status,
    is_final_status,
    parse_display_datetime,
    resolve_time_zone,
)
from scoreboard.settings import ConfigurationError


class FormatEventDateTimeTests(unittest.TestCase):
    def test_renders_date_and_time_in_display_zone(self) -> None:
        self.assertEqual(
            ("Oct 05 2025", "06:30 AM"),
            format_event_datetime("2025-10-05T13:30:00Z", "America/Los_Angeles"),
        )

    def test_timestamp_without_offset_is_treated_as_utc(self) -> None:
        self.assertEqual(
            format_event_datetime("2025-10-05T13:30:00Z"),
            format_event_datetime("2025-10-05T13:30:00"),
        )

    def test_explicit_offsets_are_honoured(self) -> None:
        self.assertEqual(
            ("Oct 05 2025", "08:30 PM"),
            format_event_datetime("2025-10-05T20:30:00-0500", "America/Chicago"),
        )
        self.assertEqual(
            ("Oct 05 2025", "06:30 AM"),
            format_event_datetime("2025-10-05T14:30:00+01:00", "America/Los_Angeles"),
        )

    def test_espn_minute_precision_timestamp(self) -> None:
        self.assertEqual(
            ("Oct 05 2025", "10:00 AM"),
            format_event_datetime("2025-10-05T17:00Z", "America/Los_Angeles"),
        )

    def test_malformed_or_empty_timestamp_yields_empty_strings(self) -> None:
        for value in ("", None, "not-a-date", 12345, "2025-13-45T99:00:00", "0001-01-01T00:00:00Z"):
            with self.subTest(value=value):
                self.assertEqual(("", ""), format_event_datetime(value))

    def test_display_datetime_round_trips_to_the_same_instant(self) -> None:
        parsed = parse_display_datetime("Oct 05 2025", "06:30 AM", "America/Los_Angeles")

        self.assertEqual(
            datetime(2025, 10, 5, 13, 30, tzinfo=timezone.utc),
            parsed.astimezone(timezone.utc),
        )

    def test_display_datetime_unparseable_returns_none(self) -> None:
        self.assertIsNone(parse_display_datetime("", "06:30 AM"))
        self.assertIsNone(parse_display_datetime("yesterday", "06:30 AM"))
        self.assertIsNone(parse_display_datetime(None, None))

    def test_unknown_time_zone_is_a_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_time_zone("Mars/Olympus_Mons")


class StatusMappingTests(unittest.TestCase):
    def test_league_status_lookup(self) -> None:
        self.assertEqual("3rd Quarter", format_league_status("NFL", "Q3"))
        self.assertEqual("Quarter 3 (In Play)", format_league_status("nba", "Q3"))
        self.assertEqual("Inning 7", format_league_status("MLB", "IN7"))

    def test_unknown_code_passes_through(self) -> None:
        self.assertEqual("WEIRD", format_league_status("NFL", "WEIRD"))
        self.assertEqual("Q3", format_league_status("NHL", "Q3"))
        self.assertEqual("", format_league_status("NFL", None))

    def test_espn_top_level_categories(self) -> None:
        cases = {
            "STATUS_SCHEDULED": "Scheduled",
            "STATUS_FINAL": "Final",
            "STATUS_CANCELED": "Canceled",
        }
        for name, expected in cases.items():
            with self.subTest(name=name):
                status = {"type": {"name": name, "detail": "Sun, October 5th"}}
                self.assertEqual((expected, name), format_espn_status(status))

    def test_espn_in_progress_uses_detail(self) -> None:
        live = {"type": {"name": "STATUS_IN_PROGRESS", "detail": "3rd Quarter"}}
        bare = {"type": {"name": "STATUS_IN_PROGRESS"}}

        self.assertEqual(("3rd Quarter", "STATUS_IN_PROGRESS"), format_espn_status(live))
        self.assertEqual(("In Progress", "STATUS_IN_PROGRESS"), format_espn_status(bare))

    def test_espn_unknown_status_falls_back_to_detail_then_name(self) -> None:
        halftime = {"type": {"name": "STATUS_HALFTIME", "detail": "Halftime"}}
        delayed = {"type": {"name": "STATUS_DELAYED"}}

        self.assertEqual(("Halftime", "STATUS_HALFTIME"), format_espn_status(halftime))
        self.assertEqual(("STATUS_DELAYED", "STATUS_DELAYED"), format_espn_status(delayed))
        self.assertEqual(("", ""), format_espn_status(None))
        self.assertEqual(("", ""), format_espn_status({"type": {"name": 5, "detail": ["x"]}}))

    def test_final_sentinels(self) -> None:
        self.assertTrue(is_final_status("STATUS_FINAL"))
        self.assertTrue(is_final_status("FT"))
        self.assertTrue(is_final_status("AOT"))
        self.assertFalse(is_final_status("STATUS_IN_PROGRESS"))
        self.assertFalse(is_final_status(None))


class ScoreParsingTests(unittest.TestCase):
    def test_score_values(self) -> None:
        cases = [("3", 3), (3, 3), ("", 0), (None, 0), ("abc", 0), ("12abc", 12), (7.0, 7)]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(expected, parse_score(raw))

    def test_team_model_coerces_score(self) -> None:
        team = Team(id="1", name="Chiefs", score="abc")

        self.assertEqual(0, team.score)
        self.assertEqual(21, Team(id="1", name="Chiefs", score="21").score)


if __name__ == "__main__":
    unittest.main()
