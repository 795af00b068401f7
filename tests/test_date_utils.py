import unittest
from datetime import datetime, timezone

from userlist.date_utils import (
    LAST_LOGIN_THRESHOLD,
    days_to_datetime,
    format_date,
    format_last_login,
    parse_login_time,
)


class DaysToDatetimeTests(unittest.TestCase):

    def test_day_count_since_epoch(self) -> None:
        self.assertEqual(days_to_datetime("0"), datetime(1970, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(format_date(days_to_datetime("18000")), "2019-04-14")
        self.assertEqual(format_date(days_to_datetime("19000")), "2022-01-08")
        self.assertEqual(format_date(days_to_datetime("+19000")), "2022-01-08")

    def test_rejects_non_plain_integers(self) -> None:
        for raw in ("18_000", " 19000 ", "19000\n", "١٨٠٠٠", "１８０００"):
            with self.subTest(raw=raw):
                self.assertIsNone(days_to_datetime(raw))

    def test_invalid(self) -> None:
        self.assertIsNone(days_to_datetime(""))
        self.assertIsNone(days_to_datetime("abc"))
        self.assertIsNone(days_to_datetime("18000.5"))
        self.assertIsNone(days_to_datetime(None))
        self.assertIsNone(days_to_datetime("99999999999"))


class ParseLoginTimeTests(unittest.TestCase):

    def test_host_before_date(self) -> None:
        when = parse_login_time("pts/0  10.0.0.1  Mon Jan 1 10:00:00 2024")
        self.assertEqual(when, datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc))

    def test_full_last_af_line_uses_login_time(self) -> None:
        line = "pts/0        Mon Jan  1 10:00:00 2024 - Mon Jan  1 11:00:00 2024  (01:00)     10.0.0.1"
        self.assertEqual(parse_login_time(line), datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc))

    def test_without_weekday(self) -> None:
        self.assertEqual(
            parse_login_time("tty1 Feb 29 23:59:59 2024"),
            datetime(2024, 2, 29, 23, 59, 59, tzinfo=timezone.utc),
        )

    def test_invalid(self) -> None:
        self.assertIsNone(parse_login_time("pts/0 10.0.0.1 2024-01-01T10:00:00"))
        self.assertIsNone(parse_login_time("pts/0 Mon Feb 30 10:00:00 2023"))
        self.assertIsNone(parse_login_time(""))
        self.assertIsNone(parse_login_time(None))


class FormatTests(unittest.TestCase):

    def test_format_date(self) -> None:
        self.assertEqual(format_date(None), "")
        self.assertEqual(format_date(datetime(2024, 3, 5, 23, 0, tzinfo=timezone.utc)), "2024-03-05")

    def test_last_login_threshold(self) -> None:
        self.assertEqual(format_last_login(None), "")
        self.assertEqual(format_last_login(datetime(1970, 1, 1, tzinfo=timezone.utc)), "")
        self.assertEqual(format_last_login(LAST_LOGIN_THRESHOLD), "")
        self.assertEqual(format_last_login(datetime(1990, 1, 2, tzinfo=timezone.utc)), "1990-01-02")
