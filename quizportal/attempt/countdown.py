"""One-second ticker driving an attempt's countdown."""
import logging
import threading

from quizportal.attempt.session import AttemptSession, AttemptState

logger = logging.getLogger(__name__)


class Countdown:
    """
    Calls ``session.tick()`` every ``interval`` seconds on a daemon thread
    until the countdown runs out, the attempt leaves IN_PROGRESS, or
    ``cancel()`` is called.
    """

    def __init__(self, session: AttemptSession, interval: float = 1.0):
        self.session = session
        self.interval = interval
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> "Countdown":
        if self.session.remaining_seconds is None:
            logger.debug("Quiz %s is untimed; countdown not started", self.session.quiz_id)
            return self
        if self._thread is None:
            self._thread = threading.Thread(
                target=self._run, name=f"countdown-{self.session.quiz_id}", daemon=True
            )
            self._thread.start()
        return self

    def cancel(self) -> None:
        self._stopped.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            if self.session.state is not AttemptState.IN_PROGRESS:
                break
            try:
                self.session.tick()
            except Exception as exc:
                # The session already recorded the failure and reopened the attempt
                logger.warning("Automatic submit failed for quiz %s: %s", self.session.quiz_id, exc)
                break
            if not self.session.remaining_seconds:
                break
