"""
Timing policy for submissions.

The check is best effort: it classifies a submission as on-time or late
from the client-reported start and the server receipt time. Missing or
unparseable start times are given the benefit of the doubt.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class TimingVerdict:
    on_time: bool
    elapsed_seconds: float | None = None


ON_TIME = TimingVerdict(on_time=True)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or datetime into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def evaluate(quiz, started_at: Any, received_at: datetime) -> TimingVerdict:
    """
    Decide whether a submission received at ``received_at`` is on time.

    On time iff the quiz is untimed, the start is unknown, or
    ``received_at - started_at <= quiz.time_limit_seconds``.
    """
    start = parse_timestamp(started_at)
    received = parse_timestamp(received_at)
    elapsed = None
    if start is not None and received is not None:
        elapsed = (received - start).total_seconds()

    limit = quiz.time_limit_seconds
    if not limit or elapsed is None:
        return TimingVerdict(on_time=True, elapsed_seconds=elapsed)
    return TimingVerdict(on_time=elapsed <= limit, elapsed_seconds=elapsed)
