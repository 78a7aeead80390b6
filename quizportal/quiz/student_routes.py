"""
Student routes for quiz functionality.

Students can:
- Submit answers for a quiz (scored server-side)
- List their own submissions
- Review their latest result for a quiz
"""
from flask import jsonify, request, current_app
from flask_login import current_user

from quizportal.common.decorators import student_required
from quizportal.quiz import error_response, quiz_bp, repositories, server_error
from quizportal.quiz.errors import InvalidPayloadError, QuizPortalError
from quizportal.quiz.service import SubmissionService
from quizportal.quiz.validation import parse_submit_request
from quizportal.security import SecurityLogger


@quiz_bp.route('/submissions', methods=['POST'])
@student_required
def submit_quiz():
    """
    Submit answers for a quiz.

    Request body:
    {
        "quizId": "abc123",
        "rawAnswers": [1, 2, -1],     // one entry per question, lenient
        "startedAt": "2025-01-01T10:00:00Z"  // optional
    }
    """
    parsed = parse_submit_request(request.get_json(silent=True))
    if not parsed.ok:
        return error_response(InvalidPayloadError(parsed.reason))
    submit_request = parsed.value

    try:
        quizzes, submissions = repositories()
        service = SubmissionService(quizzes, submissions)
        submission = service.submit(current_user, submit_request)
    except QuizPortalError as e:
        SecurityLogger.log_rejected_submission(current_user.id, submit_request.quiz_id, e.message)
        return error_response(e)
    except Exception as e:
        return server_error(e, 'submit_quiz')

    SecurityLogger.log_quiz_submission(current_user.id, {
        'quizId': submission.quiz_id,
        'score': submission.score,
        'total': submission.total,
        'onTime': submission.on_time,
        'timeSpent': submission.time_spent_seconds,
    })

    return jsonify({
        'success': True,
        'submission': submission.to_dict(),
    }), 201


@quiz_bp.route('/submissions/student', methods=['GET'])
@student_required
def list_my_submissions():
    """List the current student's submissions, newest first."""
    try:
        _, submissions = repositories()
        mine = submissions.list_by_student(current_user.id)
        return jsonify({
            'success': True,
            'submissions': [s.to_dict() for s in mine],
        }), 200
    except Exception as e:
        return server_error(e, 'list_my_submissions')


@quiz_bp.route('/quizzes/<quiz_id>/results', methods=['GET'])
@student_required
def quiz_results(quiz_id):
    """
    Latest submission of the current student for a quiz, with a
    per-question review. The answer key is revealed only here.
    """
    try:
        quizzes, submissions = repositories()
        quiz = quizzes.get_by_id(quiz_id)
        if quiz is None:
            return jsonify({'success': False, 'error': 'Quiz not found'}), 404

        latest = submissions.latest_for(current_user.id, quiz.id)
        if latest is None:
            current_app.logger.debug(f"No submission by user {current_user.id} for quiz {quiz.id}")
            return jsonify({'success': False, 'error': 'No submission found for this quiz'}), 404

        service = SubmissionService(quizzes, submissions)
        return jsonify({
            'success': True,
            'quiz': {
                'id': quiz.id,
                'title': quiz.title,
                'description': quiz.description,
                'timeLimitSeconds': quiz.time_limit_seconds,
            },
            'submission': latest.to_dict(),
            'review': service.review(quiz, latest),
        }), 200
    except Exception as e:
        return server_error(e, 'quiz_results')
