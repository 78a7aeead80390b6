"""
Server-side submission flow.

fetch quiz -> normalize answers -> evaluate timing -> score -> append.
The score is always computed here; anything score-like sent by the
client is ignored.
"""
import logging
from datetime import datetime
from typing import Callable

from quizportal.quiz import normalizer, scoring, timing
from quizportal.quiz.errors import QuizInactiveError, QuizNotFoundError
from quizportal.quiz.models import Submission, utcnow
from quizportal.quiz.repository import QuizRepository, SubmissionRepository
from quizportal.quiz.validation import SubmitRequest

logger = logging.getLogger(__name__)


class SubmissionService:
    """Scores and records submissions for authenticated students."""

    def __init__(
        self,
        quizzes: QuizRepository,
        submissions: SubmissionRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.quizzes = quizzes
        self.submissions = submissions
        self.clock = clock

    def submit(self, student, request: SubmitRequest) -> Submission:
        """
        Score ``request`` for ``student`` and append the result.

        Raises:
            QuizNotFoundError: the quiz id is unknown; nothing is stored.
            QuizInactiveError: the quiz no longer accepts submissions.
        """
        received_at = self.clock()

        quiz = self.quizzes.get_by_id(request.quiz_id)
        if quiz is None:
            raise QuizNotFoundError(request.quiz_id)
        if not quiz.is_active:
            raise QuizInactiveError(quiz.id)

        normalized = normalizer.normalize(quiz, request.raw_answers)
        verdict = timing.evaluate(quiz, request.started_at, received_at)
        result = scoring.score(quiz, normalized, verdict)

        if not verdict.on_time:
            logger.info(
                "Late submission for quiz %s by student %s (%.1fs elapsed, limit %ss); scored as zero",
                quiz.id, student.id, verdict.elapsed_seconds, quiz.time_limit_seconds,
            )

        time_spent = None
        if verdict.elapsed_seconds is not None:
            time_spent = max(0, int(verdict.elapsed_seconds))

        submission = Submission(
            quiz_id=quiz.id,
            student_id=student.id,
            student_email=student.email,
            selected_indices=normalized,
            score=result.score,
            total=result.total,
            on_time=verdict.on_time,
            started_at=timing.parse_timestamp(request.started_at),
            time_spent_seconds=time_spent,
        )
        return self.submissions.append(submission)

    def review(self, quiz, submission: Submission) -> list[dict]:
        """Per-question breakdown of a stored submission."""
        selected = list(submission.selected_indices)
        review = []
        for i, question in enumerate(quiz.questions):
            chosen = selected[i] if i < len(selected) else normalizer.UNANSWERED
            review.append({
                'text': question.text,
                'options': list(question.options),
                'selectedIndex': chosen,
                'correctIndex': question.correct_index,
                'isCorrect': chosen == question.correct_index,
            })
        return review
