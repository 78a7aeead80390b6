"""
Test cases for the submission timing policy.
"""
from datetime import datetime, timedelta, timezone

import pytest

from quizportal.quiz.timing import evaluate, parse_timestamp
from conftest import make_quiz_draft

RECEIVED = datetime(2025, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def iso_before(seconds):
    return (RECEIVED - timedelta(seconds=seconds)).isoformat()


class TestEvaluate:
    """On-time / late classification."""

    def test_untimed_quiz_is_always_on_time(self):
        """Test untimed quiz is always on time."""
        quiz = make_quiz_draft(time_limit_seconds=None)
        verdict = evaluate(quiz, iso_before(10 ** 6), RECEIVED)
        assert verdict.on_time is True
        assert verdict.elapsed_seconds == 10 ** 6

    def test_within_limit_is_on_time(self):
        """Test within limit is on time."""
        quiz = make_quiz_draft(time_limit_seconds=60)
        assert evaluate(quiz, iso_before(30), RECEIVED).on_time is True

    def test_exactly_at_limit_is_on_time(self):
        """Test exactly at limit is on time."""
        quiz = make_quiz_draft(time_limit_seconds=60)
        assert evaluate(quiz, iso_before(60), RECEIVED).on_time is True

    def test_past_limit_is_late(self):
        """Test past limit is late."""
        quiz = make_quiz_draft(time_limit_seconds=60)
        verdict = evaluate(quiz, iso_before(100), RECEIVED)
        assert verdict.on_time is False
        assert verdict.elapsed_seconds == 100

    @pytest.mark.parametrize('started_at', [None, '', 'yesterday', 12345, ['2025-05-01']])
    def test_missing_or_unparseable_start_is_on_time(self, started_at):
        """Test missing or unparseable start is on time."""
        quiz = make_quiz_draft(time_limit_seconds=60)
        verdict = evaluate(quiz, started_at, RECEIVED)
        assert verdict.on_time is True
        assert verdict.elapsed_seconds is None

    def test_zulu_suffix_is_understood(self):
        """Test zulu suffix is understood."""
        quiz = make_quiz_draft(time_limit_seconds=60)
        started = (RECEIVED - timedelta(seconds=90)).strftime('%Y-%m-%dT%H:%M:%S.000Z')
        assert evaluate(quiz, started, RECEIVED).on_time is False


class TestParseTimestamp:
    """Parsing of client-reported start times."""

    def test_naive_values_are_taken_as_utc(self):
        """Test naive values are taken as utc."""
        parsed = parse_timestamp('2025-05-01T12:00:00')
        assert parsed == RECEIVED

    def test_offsets_are_converted_to_utc(self):
        """Test offsets are converted to utc."""
        parsed = parse_timestamp('2025-05-01T14:00:00+02:00')
        assert parsed == RECEIVED
        assert parsed.tzinfo == timezone.utc

    def test_datetime_objects_pass_through(self):
        """Test datetime objects pass through."""
        assert parse_timestamp(RECEIVED) == RECEIVED
