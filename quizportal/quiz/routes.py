"""
Quiz read endpoints shared by both roles.

Teachers see every quiz including the answer key. Students only see
active quizzes, and never the answer key.
"""
from flask import jsonify
from flask_login import current_user

from quizportal.common.decorators import api_login_required
from quizportal.quiz import quiz_bp, repositories, server_error


@quiz_bp.route('/quizzes', methods=['GET'])
@api_login_required
def list_quizzes():
    """List quizzes visible to the current user."""
    try:
        quizzes, _ = repositories()
        is_teacher = current_user.is_teacher()
        items = quizzes.list(active_only=not is_teacher)
        return jsonify({
            'success': True,
            'quizzes': [quiz.to_dict(include_answers=is_teacher) for quiz in items],
        }), 200
    except Exception as e:
        return server_error(e, 'list_quizzes')


@quiz_bp.route('/quizzes/<quiz_id>', methods=['GET'])
@api_login_required
def get_quiz(quiz_id):
    """
    Get one quiz.

    Students fetch quiz content here when starting an attempt; inactive
    quizzes are reported as not found to them.
    """
    try:
        quizzes, _ = repositories()
        quiz = quizzes.get_by_id(quiz_id)
        is_teacher = current_user.is_teacher()
        if quiz is None or (not is_teacher and not quiz.is_active):
            return jsonify({'success': False, 'error': 'Quiz not found'}), 404
        return jsonify({
            'success': True,
            'quiz': quiz.to_dict(include_answers=is_teacher),
        }), 200
    except Exception as e:
        return server_error(e, 'get_quiz')
