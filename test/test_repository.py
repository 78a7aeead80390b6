"""
Test cases for the quiz and submission repositories.
"""
from unittest.mock import MagicMock

import pytest

from quizportal import db
from quizportal.quiz.models import Submission
from quizportal.quiz.repository import QuizRepository, SubmissionRepository
from conftest import make_quiz_draft


class TestQuizRepository:
    """Quiz persistence through the SQLAlchemy session."""

    def test_add_all_assigns_ids_and_positions(self, app):
        """Test imported quizzes get ids and keep question order."""
        with app.app_context():
            repo = QuizRepository(db.session)
            quizzes = repo.add_all([make_quiz_draft(title='One'), make_quiz_draft(title='Two')])
            assert len({quiz.id for quiz in quizzes}) == 2
            assert [q.position for q in quizzes[0].questions] == [0, 1]
            assert repo.get_by_id(quizzes[1].id).title == 'Two'

    def test_list_filters_inactive(self, app):
        """Test active_only hides inactive quizzes."""
        with app.app_context():
            repo = QuizRepository(db.session)
            repo.add(make_quiz_draft(title='Open'))
            repo.add(make_quiz_draft(title='Closed', is_active=False))
            assert [quiz.title for quiz in repo.list(active_only=True)] == ['Open']
            assert len(repo.list()) == 2

    def test_get_by_id_unknown(self, app):
        """Test an unknown id returns None."""
        with app.app_context():
            assert QuizRepository(db.session).get_by_id('missing') is None

    def test_failed_commit_rolls_back(self):
        """Test any commit failure rolls the session back and propagates."""
        session = MagicMock()
        session.commit.side_effect = OverflowError('too large')
        with pytest.raises(OverflowError):
            QuizRepository(session).add(make_quiz_draft())
        session.rollback.assert_called_once()


class TestSubmissionRepository:
    """Append-only submission log."""

    def _submission(self, quiz_id, student_id, score):
        return Submission(quiz_id=quiz_id, student_id=student_id, selected_indices=[1, 2],
                          score=score, total=2, on_time=True)

    def test_append_generates_ids(self, app, quiz_id):
        """Test each append stores a new row with its own id."""
        with app.app_context():
            repo = SubmissionRepository(db.session)
            first = repo.append(self._submission(quiz_id, 1, 2))
            second = repo.append(self._submission(quiz_id, 1, 1))
            assert first.id != second.id
            assert len(repo.list_by_quiz(quiz_id)) == 2

    def test_latest_for_student(self, app, quiz_id):
        """Test latest_for returns the newest submission of that student."""
        with app.app_context():
            repo = SubmissionRepository(db.session)
            repo.append(self._submission(quiz_id, 1, 0))
            repo.append(self._submission(quiz_id, 1, 2))
            assert repo.latest_for(1, quiz_id).score == 2
            assert repo.latest_for(2, quiz_id) is None

    def test_failed_append_rolls_back(self):
        """Test a failed insert rolls the session back and propagates."""
        session = MagicMock()
        session.commit.side_effect = RuntimeError('db down')
        with pytest.raises(RuntimeError):
            SubmissionRepository(session).append(self._submission('q', 1, 0))
        session.rollback.assert_called_once()
