"""
Repositories over the SQLAlchemy session.

Handlers construct these explicitly with ``db.session`` (or any other
session) instead of reaching for a process-wide store.
"""
from __future__ import annotations

from quizportal.quiz.models import Question, Quiz, Submission, new_id, utcnow
from quizportal.quiz.validation import QuizDraft


class QuizRepository:
    """Read access to quizzes plus creation for authoring endpoints."""

    def __init__(self, session):
        self.session = session

    def list(self, active_only: bool = False) -> list[Quiz]:
        query = self.session.query(Quiz)
        if active_only:
            query = query.filter(Quiz.is_active.is_(True))
        return query.order_by(Quiz.created_at, Quiz.id).all()

    def get_by_id(self, quiz_id: str) -> Quiz | None:
        return self.session.get(Quiz, str(quiz_id))

    def add_all(self, drafts: list[QuizDraft], created_by: int | None = None) -> list[Quiz]:
        """Persist validated drafts in a single transaction."""
        quizzes = [self._build(draft, created_by) for draft in drafts]
        try:
            self.session.add_all(quizzes)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return quizzes

    def add(self, draft: QuizDraft, created_by: int | None = None) -> Quiz:
        return self.add_all([draft], created_by)[0]

    @staticmethod
    def _build(draft: QuizDraft, created_by: int | None) -> Quiz:
        return Quiz(
            id=new_id(),
            title=draft.title,
            description=draft.description,
            time_limit_seconds=draft.time_limit_seconds,
            is_active=draft.is_active,
            created_by=created_by,
            created_at=utcnow(),
            questions=[
                Question(
                    position=position,
                    text=question.text,
                    options=list(question.options),
                    correct_index=question.correct_index,
                )
                for position, question in enumerate(draft.questions)
            ],
        )


class SubmissionRepository:
    """
    Append-only log of submissions.

    Every append is an independent INSERT with a freshly generated id, so
    concurrent appends for different attempts cannot overwrite each other.
    """

    def __init__(self, session):
        self.session = session

    def append(self, submission: Submission) -> Submission:
        submission.id = new_id()
        submission.created_at = utcnow()
        try:
            self.session.add(submission)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return submission

    def list_all(self, quiz_id: str | None = None) -> list[Submission]:
        query = self.session.query(Submission)
        if quiz_id is not None:
            query = query.filter_by(quiz_id=str(quiz_id))
        return query.order_by(Submission.created_at.desc()).all()

    def list_by_quiz(self, quiz_id: str) -> list[Submission]:
        return self.list_all(quiz_id=quiz_id)

    def list_by_student(self, student_id: int) -> list[Submission]:
        return (
            self.session.query(Submission)
            .filter_by(student_id=student_id)
            .order_by(Submission.created_at.desc())
            .all()
        )

    def latest_for(self, student_id: int, quiz_id: str) -> Submission | None:
        return (
            self.session.query(Submission)
            .filter_by(student_id=student_id, quiz_id=str(quiz_id))
            .order_by(Submission.created_at.desc())
            .first()
        )
