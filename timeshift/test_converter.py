import unittest
from datetime import datetime

from dateutil import tz

from timeshift.converter import (current_time, format_timestamp, modify, reformat,
                                 resolve_timestamp, to_12h, to_24h)
from timeshift.detector import detect_format
from timeshift.errors import (InvalidDateTimeFormat, InvalidTimestampType, NoMatchingFormat,
                              UnknownUnit, attempt)
from timeshift.provider import Context


class TestFormatConverter(unittest.TestCase):
    def test_to_12h(self):
        test_cases = [
            ("2024-06-27 14:34:56", None, "2:34:56 PM"),
            ("2024-06-27 09:05:00", None, "9:05:00 AM"),
            ("2024-06-27 00:05:00", '%Y-%m-%d %H:%M %p', "2024-06-27 12:05 AM"),
            ("14:34:56", '%-H:%M', "2:34"),
            ("2024-06-27 12:00:00", '%H %P', "12 pm"),
            ("27 June 2024", '%d/%m/%Y %H:%M', "27/06/2024 12:00"),
        ]

        for raw, output, expected in test_cases:
            with self.subTest(raw=raw, output=output):
                result = to_12h(raw) if output is None else to_12h(raw, output)
                self.assertEqual(result, expected)

    def test_to_24h(self):
        test_cases = [
            ("02:34:56 PM", None, "14:34:56"),
            ("2024-06-27 02:34:56 pm", '%H:%M', "14:34"),
            ("27 June 2024 PM", '%H:%M', "12:00"),
            ("12:15:00 AM", None, "00:15:00"),
            ("2:34:56 PM", '%-H:%M', "14:34"),
        ]

        for raw, output, expected in test_cases:
            with self.subTest(raw=raw, output=output):
                result = to_24h(raw) if output is None else to_24h(raw, output)
                self.assertEqual(result, expected)

    def test_12h_24h_round_trip(self):
        self.assertEqual(to_24h(to_12h("2024-06-27 14:34:56")), "14:34:56")
        self.assertEqual(to_24h(to_12h("2024-06-27 00:00:01")), "00:00:01")

    def test_reformat_is_idempotent_with_detected_pattern(self):
        samples = [
            "2024-06-27 14:34:56",
            "27/06/2024 02:34:56 PM",
            "20240627143456",
            "Thu, 27 Jun 2024 14:34:56",
            "27 June 2024 pm",
            "02:34:56pm",
        ]

        for raw in samples:
            with self.subTest(raw=raw):
                self.assertEqual(reformat(raw, detect_format(raw)), raw)

    def test_reformat(self):
        test_cases = [
            ("27/06/2024", '%A, %B %-d %Y', "Thursday, June 27 2024"),
            ("20240627143456", '%Y-%m-%dT%H:%M:%S', "2024-06-27T14:34:56"),
            ("2024-06-27", '%d%%', "27%"),
            ("Jun 27, 2024 14:34:56", '%y%m%d', "240627"),
        ]

        for raw, output, expected in test_cases:
            with self.subTest(raw=raw, output=output):
                self.assertEqual(reformat(raw, output), expected)

    def test_unrecognized_input(self):
        for convert in (reformat, to_12h, to_24h):
            with self.subTest(convert=convert.__name__):
                with self.assertRaises(NoMatchingFormat):
                    convert("yesterday-ish", '%H:%M')


class TestModify(unittest.TestCase):
    def test_modify(self):
        """Test shifting by normalized modifiers"""
        test_cases = [
            ("2024-06-27 12:34:56", "+7d", None, "2024-07-04 12:34:56"),
            ("2024-06-27 12:34:56", "-1y", None, "2023-06-27 12:34:56"),
            ("2024-06-27 12:34:56", "-1y 2m", None, "2023-04-27 12:34:56"),
            ("2024-06-27 12:34:56", "+1d -2h", None, "2024-06-28 10:34:56"),
            ("2024-06-27 12:34:56", "3 months", None, "2024-09-27 12:34:56"),
            ("2024-06-27 23:59:30", "45s", None, "2024-06-28 00:00:15"),
            ("2024-01-31", "+1m", '%Y-%m-%d', "2024-02-29"),
            ("27 June 2024", "+2h 30i", '%I:%M %p', "02:30 AM"),
            ("June 27th 2024 2:30pm", "+1h", None, "2024-06-27 15:30:00"),
        ]

        for raw, modifier, output, expected in test_cases:
            with self.subTest(raw=raw, modifier=modifier):
                if output is None:
                    result = modify(raw, modifier)
                else:
                    result = modify(raw, modifier, output)
                self.assertEqual(result, expected)

    def test_empty_modifier_is_a_no_op(self):
        self.assertEqual(modify("2024-06-27 12:34:56", ""), "2024-06-27 12:34:56")

    def test_modify_failures(self):
        with self.assertRaises(UnknownUnit):
            modify("2024-06-27 12:34:56", "5 fortnights")
        with self.assertRaises(InvalidDateTimeFormat):
            modify("no date here", "+1d")

    def test_modify_out_of_range(self):
        """Test shifting past the supported years fails with a named error"""
        test_cases = [
            ("9999-12-31 23:59:59", "+1s"),
            ("2024-06-27", "+9000y"),
            ("0001-01-01 00:00:00", "-1d"),
            ("2024-06-27", "+99999999999999d"),
        ]

        for raw, modifier in test_cases:
            with self.subTest(raw=raw, modifier=modifier):
                with self.assertRaises(InvalidDateTimeFormat) as caught:
                    modify(raw, modifier)
                self.assertIn("out of range", str(caught.exception))
                self.assertFalse(attempt(modify, raw, modifier).ok)


class TestTimestamps(unittest.TestCase):
    def test_format_timestamp(self):
        test_cases = [
            (0, Context(), "1970-01-01 00:00:00"),
            (0, Context('Asia/Dhaka'), "1970-01-01 06:00:00"),
            (1719498896, Context(), "2024-06-27 14:34:56"),
            (1719498896.75, Context(), "2024-06-27 14:34:56"),
            ("27 June 2024", Context(), "2024-06-27 00:00:00"),
        ]

        for timestamp, context, expected in test_cases:
            with self.subTest(timestamp=timestamp, timezone=context.timezone):
                self.assertEqual(format_timestamp(timestamp, context=context), expected)

    def test_invalid_timestamp_type(self):
        for timestamp in (True, None, [1], {'ts': 1}):
            with self.subTest(timestamp=timestamp):
                with self.assertRaises(InvalidTimestampType) as caught:
                    format_timestamp(timestamp)
                self.assertIsInstance(caught.exception, TypeError)

    def test_resolve_timestamp(self):
        value = resolve_timestamp(1719498896, Context())
        self.assertEqual(value, datetime(2024, 6, 27, 14, 34, 56, tzinfo=tz.UTC))

    def test_current_time(self):
        self.assertEqual(current_time('%Y'), str(datetime.now(tz.UTC).year))
        self.assertEqual(len(current_time()), len("2024-06-27 14:34:56"))


class TestResult(unittest.TestCase):
    def test_attempt(self):
        """Test failures come back as values instead of exceptions"""
        success = attempt(to_12h, "14:34:56")
        self.assertTrue(success.ok)
        self.assertEqual(success.value, "2:34:56 PM")

        failure = attempt(to_12h, "nope")
        self.assertFalse(failure.ok)
        self.assertIsInstance(failure.error, NoMatchingFormat)
        self.assertIsNone(failure.value)

    def test_attempt_propagates_other_errors(self):
        with self.assertRaises(TypeError):
            attempt(to_12h, None)


if __name__ == '__main__':
    unittest.main()
