"""
Client side of a quiz attempt: the attempt state machine, its countdown
ticker and an HTTP client for the portal API.
"""
from quizportal.attempt.session import (
    AttemptSession,
    AttemptState,
    AttemptStateError,
    SubmitTrigger,
)
from quizportal.attempt.countdown import Countdown
from quizportal.attempt.client import PortalClient, SubmissionFailedError

__all__ = [
    'AttemptSession',
    'AttemptState',
    'AttemptStateError',
    'SubmitTrigger',
    'Countdown',
    'PortalClient',
    'SubmissionFailedError',
]
