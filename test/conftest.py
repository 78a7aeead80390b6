"""
Pytest configuration and fixtures for testing.
Every test gets a fresh application bound to an in-memory SQLite database.
"""
import os

import pytest

# Set test environment variables BEFORE importing the app package
os.environ.setdefault('SECRET_KEY', 'sfndsfojoriwew09rjfjndsknfkj')
os.environ.setdefault('FLASK_ENV', 'testing')
os.environ.setdefault('MIN_PASSWORD_LENGTH', '6')

from quizportal import create_app, db  # noqa: E402
from quizportal.auth.models import User  # noqa: E402
from quizportal.auth.utils import hash_password  # noqa: E402
from quizportal.quiz.repository import QuizRepository  # noqa: E402
from quizportal.quiz.validation import QuestionDraft, QuizDraft  # noqa: E402

STUDENT_EMAIL = 'student@test.com'
TEACHER_EMAIL = 'teacher@test.com'
PASSWORD = 'password123'


def make_quiz_draft(time_limit_seconds=None, is_active=True, title='Arithmetic'):
    """Two questions whose answer key is [1, 2]."""
    return QuizDraft(
        title=title,
        description='Basic sums',
        time_limit_seconds=time_limit_seconds,
        is_active=is_active,
        questions=[
            QuestionDraft(text='What is 2 + 2?', options=['3', '4', '5'], correct_index=1),
            QuestionDraft(text='What is 3 + 3?', options=['5', '7', '6', '8'], correct_index=2),
        ],
    )


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SEED_DEMO_USERS': False,
    })
    with app.app_context():
        for email, name, role in (
            (STUDENT_EMAIL, 'Test Student', 'student'),
            (TEACHER_EMAIL, 'Test Teacher', 'teacher'),
        ):
            db.session.add(User(email=email, full_name=name, user_type=role,
                                password_hash=hash_password(PASSWORD)))
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def _login(app, email):
    test_client = app.test_client()
    response = test_client.post('/api/auth/login', json={'email': email, 'password': PASSWORD})
    assert response.status_code == 200
    return test_client


@pytest.fixture
def student_client(app):
    """Test client logged in as a student."""
    return _login(app, STUDENT_EMAIL)


@pytest.fixture
def teacher_client(app):
    """Test client logged in as a teacher."""
    return _login(app, TEACHER_EMAIL)


@pytest.fixture
def add_quiz(app):
    """Factory persisting a quiz and returning its id."""
    def _add(**kwargs):
        with app.app_context():
            quiz = QuizRepository(db.session).add(make_quiz_draft(**kwargs))
            return quiz.id
    return _add


@pytest.fixture
def quiz_id(add_quiz):
    """An active, untimed two-question quiz with answer key [1, 2]."""
    return add_quiz()
