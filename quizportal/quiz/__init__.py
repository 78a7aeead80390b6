"""
Quiz module: authoring, taking and scoring multiple-choice quizzes.

Teachers create or import quizzes; students fetch them, submit answers
and get a server-computed score.
"""
from flask import Blueprint, current_app, jsonify
from quizportal.config import config

quiz_bp = Blueprint('quiz', __name__, url_prefix=config.API_PREFIX)


def error_response(exc):
    """Translate a QuizPortalError into the JSON error envelope."""
    return jsonify({'success': False, 'error': exc.message}), exc.status_code


def server_error(exc, where: str):
    from quizportal import db
    db.session.rollback()
    current_app.logger.exception(f"Error in {where}: {str(exc)}")
    return jsonify({'success': False, 'error': 'Internal server error'}), 500


def repositories():
    """Repositories bound to the current request's session."""
    from quizportal import db
    from quizportal.quiz.repository import QuizRepository, SubmissionRepository
    return QuizRepository(db.session), SubmissionRepository(db.session)


from quizportal.quiz import routes, student_routes, teacher_routes  # noqa: E402,F401
