"""
Teacher routes for quiz management.

Teachers can:
- Create quizzes
- Import one or many quizzes from JSON
- Download a JSON template for imports
- View every student submission
"""
import json

from flask import Response, jsonify, request, current_app
from flask_login import current_user

from quizportal.common.decorators import teacher_required
from quizportal.quiz import quiz_bp, repositories, server_error
from quizportal.quiz.validation import parse_quiz, parse_quiz_batch

QUIZ_TEMPLATE = {
    "title": "Sample Quiz",
    "description": "Short description of the quiz",
    "timeLimitSeconds": 600,
    "questions": [
        {
            "text": "What is 2 + 2?",
            "options": ["3", "4", "5", "6"],
            "correctIndex": 1
        },
        {
            "text": "Select the capital of France",
            "options": ["Berlin", "Madrid", "Paris", "Rome"],
            "correctIndex": 2
        }
    ]
}


@quiz_bp.route('/quizzes', methods=['POST'])
@teacher_required
def create_quiz():
    """
    Create a new quiz.

    Request body:
    {
        "title": "Quiz Title",
        "description": "Optional description",
        "timeLimitSeconds": 600,  // Optional, untimed when absent
        "isActive": true,  // Optional, default true
        "questions": [{"text": "...", "options": ["a", "b"], "correctIndex": 0}]
    }
    """
    parsed = parse_quiz(request.get_json(silent=True))
    if not parsed.ok:
        return jsonify({'success': False, 'error': parsed.reason}), 400

    try:
        quizzes, _ = repositories()
        quiz = quizzes.add(parsed.value, created_by=current_user.id)
    except Exception as e:
        return server_error(e, 'create_quiz')

    current_app.logger.info(
        f"Quiz created: ID={quiz.id}, Title={quiz.title}, Questions={quiz.get_question_count()}, "
        f"By={current_user.id}"
    )
    return jsonify({
        'success': True,
        'message': 'Quiz created successfully',
        'quiz': quiz.to_dict(),
    }), 201


@quiz_bp.route('/quizzes/import', methods=['POST'])
@teacher_required
def import_quizzes():
    """
    Import a single quiz object or a list of quiz objects.

    All items are validated first; if any is invalid nothing is imported.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        return jsonify({'success': False, 'error': 'Invalid JSON'}), 400

    parsed = parse_quiz_batch(payload)
    if not parsed.ok:
        return jsonify({'success': False, 'error': parsed.reason}), 400

    try:
        quizzes, _ = repositories()
        imported = quizzes.add_all(parsed.value, created_by=current_user.id)
    except Exception as e:
        return server_error(e, 'import_quizzes')

    current_app.logger.info(f"Imported {len(imported)} quiz(zes) by user {current_user.id}")
    return jsonify({
        'success': True,
        'importedCount': len(imported),
        'quizzes': [quiz.to_dict() for quiz in imported],
    }), 201


@quiz_bp.route('/quizzes/template', methods=['GET'])
@teacher_required
def quiz_template():
    """Download a JSON template accepted by the import endpoint."""
    body = json.dumps(QUIZ_TEMPLATE, indent=2)
    return Response(
        body,
        status=200,
        headers={
            'Content-Type': 'application/json; charset=utf-8',
            'Content-Disposition': 'attachment; filename=quiz-template.json',
        },
    )


@quiz_bp.route('/submissions', methods=['GET'])
@teacher_required
def list_submissions():
    """
    List all submissions, newest first.
    Optional query parameter: quizId
    """
    try:
        _, submissions = repositories()
        items = submissions.list_all(quiz_id=request.args.get('quizId') or None)
        return jsonify({
            'success': True,
            'submissions': [s.to_dict() for s in items],
        }), 200
    except Exception as e:
        return server_error(e, 'list_submissions')
