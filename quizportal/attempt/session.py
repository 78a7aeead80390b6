"""
Client-side state machine for a single quiz attempt.

LOADING -> IN_PROGRESS -> SUBMITTING -> SUBMITTED | FAILED, plus ABANDONED
when the attempt is cancelled. Three sources can trigger a submit: the
student, the countdown reaching zero, and an integrity violation while
enforcement is active. All of them go through ``submit()``, which checks
and sets the in-flight guard under one lock so only one request is ever
sent per attempt.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

UNANSWERED = -1


class AttemptState(str, Enum):
    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"
    ABANDONED = "abandoned"


class SubmitTrigger(str, Enum):
    MANUAL = "manual"
    TIMEOUT = "timeout"
    INTEGRITY = "integrity"


class AttemptStateError(RuntimeError):
    """Raised when an action is not allowed in the attempt's current state."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_hms(total_seconds: int) -> str:
    s = max(0, int(total_seconds))
    return f"{s // 3600:02d}:{(s % 3600) // 60:02d}:{s % 60:02d}"


class AttemptSession:
    """
    Tracks one student's in-progress pass through a quiz.

    ``submitter`` receives the wire payload ``{quizId, rawAnswers,
    startedAt}`` and returns the server's result; any exception it raises
    counts as a failed submission.
    """

    def __init__(
        self,
        quiz_id: str,
        submitter: Callable[[dict], Any],
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.quiz_id = str(quiz_id)
        self._submitter = submitter
        self._clock = clock
        self._lock = threading.Lock()

        self.state = AttemptState.LOADING
        self.quiz: dict | None = None
        self.started_at: datetime | None = None
        self.selected: list[int] = []
        self.visited: list[bool] = []
        self.marked: list[bool] = []
        self.current_index = 0
        self.remaining_seconds: int | None = None

        self.fullscreen_requested = False
        self.integrity_violated = False
        self.review_blocked = False

        self._in_flight = False
        self.last_trigger: SubmitTrigger | None = None
        self.last_error: Exception | None = None
        self.result: Any = None

    # -- lifecycle -------------------------------------------------------

    def load(self, quiz: dict) -> None:
        """Quiz content arrived: initialise per-question state and start the clock."""
        questions = quiz.get("questions") or []
        if not questions:
            raise ValueError("Quiz must contain at least one question.")
        with self._lock:
            if self.state is not AttemptState.LOADING:
                raise AttemptStateError(f"Cannot load quiz content while {self.state.value}")
            count = len(questions)
            self.quiz = quiz
            self.selected = [UNANSWERED] * count
            self.visited = [False] * count
            self.marked = [False] * count
            self.current_index = 0
            self.visited[0] = True
            self.started_at = self._clock()
            limit = quiz.get("timeLimitSeconds")
            self.remaining_seconds = int(limit) if limit else None
            self.state = AttemptState.IN_PROGRESS
        logger.debug("Attempt on quiz %s started with %d question(s)", self.quiz_id, count)

    def abandon(self) -> None:
        """
        Navigate away. Nothing is submitted; a response to a request that
        is already in flight will be discarded.
        """
        with self._lock:
            if self.state in (AttemptState.LOADING, AttemptState.IN_PROGRESS, AttemptState.SUBMITTING):
                logger.info("Attempt on quiz %s abandoned while %s", self.quiz_id, self.state.value)
                self.state = AttemptState.ABANDONED

    # -- in-progress actions ---------------------------------------------

    @property
    def question_count(self) -> int:
        return len(self.selected)

    def _require_in_progress(self) -> None:
        if self.state is not AttemptState.IN_PROGRESS:
            raise AttemptStateError(f"Attempt is {self.state.value}")

    def _check_question(self, q_index: int) -> None:
        if not 0 <= q_index < self.question_count:
            raise IndexError(f"Question index {q_index} out of range")

    def option_count(self, q_index: int) -> int:
        return len(self.quiz["questions"][q_index]["options"])

    def select_answer(self, q_index: int, option_index: int) -> None:
        with self._lock:
            self._require_in_progress()
            self._check_question(q_index)
            if not 0 <= option_index < self.option_count(q_index):
                raise IndexError(f"Option index {option_index} out of range")
            self.selected[q_index] = option_index
            self.visited[q_index] = True

    def clear_answer(self, q_index: int) -> None:
        with self._lock:
            self._require_in_progress()
            self._check_question(q_index)
            self.selected[q_index] = UNANSWERED

    def toggle_mark(self, q_index: int) -> bool:
        with self._lock:
            self._require_in_progress()
            self._check_question(q_index)
            self.marked[q_index] = not self.marked[q_index]
            return self.marked[q_index]

    def navigate(self, to_index: int) -> int:
        """Move to ``to_index`` clamped to the valid range; marks it visited."""
        with self._lock:
            self._require_in_progress()
            clamped = max(0, min(to_index, self.question_count - 1))
            self.current_index = clamped
            self.visited[clamped] = True
            return clamped

    def next(self) -> int:
        return self.navigate(self.current_index + 1)

    def previous(self) -> int:
        return self.navigate(self.current_index - 1)

    @property
    def answered(self) -> list[bool]:
        return [value >= 0 for value in self.selected]

    @property
    def answered_count(self) -> int:
        return sum(self.answered)

    @property
    def remaining_display(self) -> str | None:
        if self.remaining_seconds is None:
            return None
        return format_hms(self.remaining_seconds)

    # -- timer and integrity triggers ------------------------------------

    def tick(self) -> Any:
        """
        One second elapsed. Returns the submit result when this tick ran
        the countdown out and won the submit, else None.

        Only the tick that reaches zero submits; a failed automatic submit
        is left for the student to retry.
        """
        with self._lock:
            if self.state is not AttemptState.IN_PROGRESS or not self.remaining_seconds:
                return None
            self.remaining_seconds -= 1
            expired = self.remaining_seconds == 0
        if expired:
            logger.info("Time limit reached on quiz %s; submitting automatically", self.quiz_id)
            return self.submit(SubmitTrigger.TIMEOUT)
        return None

    def enable_integrity_enforcement(self) -> None:
        """The isolated presentation mode was entered; leaving it now auto-submits."""
        with self._lock:
            self.fullscreen_requested = True

    def report_integrity_violation(self) -> Any:
        with self._lock:
            if not self.fullscreen_requested or self.state is not AttemptState.IN_PROGRESS:
                return None
            self.integrity_violated = True
        logger.warning("Integrity violation on quiz %s; submitting automatically", self.quiz_id)
        return self.submit(SubmitTrigger.INTEGRITY)

    # -- submission ------------------------------------------------------

    def payload(self) -> dict:
        return {
            "quizId": self.quiz_id,
            "rawAnswers": list(self.selected),
            "startedAt": self.started_at.isoformat() if self.started_at else None,
        }

    def submit(self, trigger: SubmitTrigger = SubmitTrigger.MANUAL) -> Any:
        """
        Send the attempt. Returns the server result, or None when another
        trigger already owns the submission (or the attempt is not in
        progress any more).

        Raises:
            The submitter's exception when the request fails.
        """
        with self._lock:
            if self._in_flight or self.state is not AttemptState.IN_PROGRESS:
                logger.debug("Submit (%s) ignored: attempt is %s", trigger.value, self.state.value)
                return None
            self._in_flight = True
            self.state = AttemptState.SUBMITTING
            self.last_trigger = trigger
            self.last_error = None
            payload = self.payload()

        try:
            result = self._submitter(payload)
        except Exception as exc:
            self._on_failure(trigger, exc)
            raise

        with self._lock:
            if self.state is AttemptState.ABANDONED:
                logger.info("Discarding submit response for abandoned attempt on quiz %s", self.quiz_id)
                return None
            self.result = result
            self.state = AttemptState.SUBMITTED
        logger.info("Attempt on quiz %s submitted (%s)", self.quiz_id, trigger.value)
        return result

    def _on_failure(self, trigger: SubmitTrigger, exc: Exception) -> None:
        with self._lock:
            self.last_error = exc
            if self.state is AttemptState.ABANDONED:
                return
            if trigger is SubmitTrigger.INTEGRITY:
                # Review stays locked after an enforced submit, even a failed one
                self.state = AttemptState.FAILED
                self.review_blocked = True
            else:
                self.state = AttemptState.IN_PROGRESS
                self._in_flight = False
        logger.warning("Submit (%s) failed for quiz %s: %s", trigger.value, self.quiz_id, exc)
