"""
Test cases for the student submission flow.
"""
from datetime import datetime, timedelta, timezone

from quizportal import db
from quizportal.quiz.models import Submission


def submit(client, quiz_id, answers, **extra):
    payload = {'quizId': quiz_id, 'rawAnswers': answers}
    payload.update(extra)
    return client.post('/api/submissions', json=payload)


def seconds_ago(seconds):
    return (datetime.now(timezone.utc) - timedelta(seconds=seconds)).isoformat()


class TestSubmitScoring:
    """Scoring of submissions on a quiz with answer key [1, 2]."""

    def test_all_correct(self, student_client, quiz_id):
        """Test all correct."""
        response = submit(student_client, quiz_id, [1, 2])
        assert response.status_code == 201
        data = response.get_json()
        assert data['success'] is True
        submission = data['submission']
        assert submission['score'] == 2
        assert submission['total'] == 2
        assert submission['selectedIndices'] == [1, 2]
        assert submission['onTime'] is True
        assert submission['id']

    def test_short_answers_are_padded(self, student_client, quiz_id):
        """Test short answers are padded."""
        submission = submit(student_client, quiz_id, [1]).get_json()['submission']
        assert submission['selectedIndices'] == [1, -1]
        assert submission['score'] == 1
        assert submission['total'] == 2

    def test_out_of_range_answers_are_unanswered(self, student_client, quiz_id):
        """Test out of range answers are unanswered."""
        submission = submit(student_client, quiz_id, [5, -3]).get_json()['submission']
        assert submission['selectedIndices'] == [-1, -1]
        assert submission['score'] == 0
        assert submission['total'] == 2

    def test_legacy_field_names_are_accepted(self, student_client, quiz_id):
        """Test legacy field names are accepted."""
        response = student_client.post('/api/submissions', json={
            'quizId': quiz_id,
            'selectedIndices': [1, 2],
            'startedAtIso': seconds_ago(5),
        })
        assert response.status_code == 201
        assert response.get_json()['submission']['score'] == 2

    def test_client_supplied_score_is_ignored(self, student_client, quiz_id):
        """Test client supplied score is ignored."""
        submission = submit(student_client, quiz_id, [0, 0], score=2, total=2).get_json()['submission']
        assert submission['score'] == 0

    def test_late_submission_scores_zero(self, student_client, add_quiz):
        """Test late submission scores zero."""
        quiz_id = add_quiz(time_limit_seconds=60)
        response = submit(student_client, quiz_id, [1, 2], startedAt=seconds_ago(100))
        assert response.status_code == 201
        submission = response.get_json()['submission']
        assert submission['score'] == 0
        assert submission['total'] == 2
        assert submission['onTime'] is False
        assert submission['timeSpentSeconds'] >= 100

    def test_within_limit_is_scored(self, student_client, add_quiz):
        """Test within limit is scored."""
        quiz_id = add_quiz(time_limit_seconds=60)
        submission = submit(student_client, quiz_id, [1, 2], startedAt=seconds_ago(10)).get_json()['submission']
        assert submission['score'] == 2
        assert submission['onTime'] is True

    def test_unparseable_start_is_on_time(self, student_client, add_quiz):
        """Test unparseable start is on time."""
        quiz_id = add_quiz(time_limit_seconds=60)
        submission = submit(student_client, quiz_id, [1, 2], startedAt='not a date').get_json()['submission']
        assert submission['onTime'] is True
        assert submission['score'] == 2
        assert submission['timeSpentSeconds'] is None

    def test_submission_is_stored(self, app, student_client, quiz_id):
        """Test submission is stored."""
        submission_id = submit(student_client, quiz_id, [1, 2]).get_json()['submission']['id']
        with app.app_context():
            stored = db.session.get(Submission, submission_id)
            assert stored is not None
            assert stored.quiz_id == quiz_id
            assert stored.score == 2

    def test_resubmission_appends(self, app, student_client, quiz_id):
        """Test resubmission appends."""
        first = submit(student_client, quiz_id, [1, 2]).get_json()['submission']
        second = submit(student_client, quiz_id, [0, 0]).get_json()['submission']
        assert first['id'] != second['id']
        with app.app_context():
            assert Submission.query.filter_by(quiz_id=quiz_id).count() == 2


class TestSubmitRejections:
    """Requests that must not store anything."""

    def _count(self, app):
        with app.app_context():
            return Submission.query.count()

    def test_unknown_quiz(self, app, student_client):
        """Test submitting to an unknown quiz is refused."""
        response = submit(student_client, 'no-such-quiz', [1, 2])
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Quiz not found'
        assert self._count(app) == 0

    def test_inactive_quiz(self, app, student_client, add_quiz):
        """Test submitting to an inactive quiz is refused."""
        quiz_id = add_quiz(is_active=False)
        response = submit(student_client, quiz_id, [1, 2])
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Quiz is not active'
        assert self._count(app) == 0

    def test_missing_quiz_id(self, student_client):
        """Test missing quiz id."""
        response = student_client.post('/api/submissions', json={'rawAnswers': [1]})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_answers_not_a_list(self, student_client, quiz_id):
        """Test answers not a list."""
        response = student_client.post('/api/submissions', json={'quizId': quiz_id, 'rawAnswers': '1,2'})
        assert response.status_code == 400

    def test_non_json_body(self, student_client):
        """Test non json body."""
        response = student_client.post('/api/submissions', data='quizId=1', content_type='text/plain')
        assert response.status_code == 400

    def test_anonymous_is_rejected(self, app, client, quiz_id):
        """Test anonymous is rejected."""
        response = submit(client, quiz_id, [1, 2])
        assert response.status_code == 401
        assert self._count(app) == 0

    def test_teacher_cannot_submit(self, app, teacher_client, quiz_id):
        """Test teacher cannot submit."""
        response = submit(teacher_client, quiz_id, [1, 2])
        assert response.status_code == 403
        assert self._count(app) == 0


class TestStudentSubmissions:
    """Student history and results."""

    def test_lists_own_submissions_newest_first(self, student_client, quiz_id):
        """Test lists own submissions newest first."""
        submit(student_client, quiz_id, [1, 2])
        submit(student_client, quiz_id, [0, 0])
        response = student_client.get('/api/submissions/student')
        assert response.status_code == 200
        items = response.get_json()['submissions']
        assert len(items) == 2
        assert [item['score'] for item in items] == [0, 2]

    def test_results_before_submitting(self, student_client, quiz_id):
        """Test results before submitting."""
        response = student_client.get(f'/api/quizzes/{quiz_id}/results')
        assert response.status_code == 404

    def test_results_for_unknown_quiz(self, student_client):
        """Test results for unknown quiz."""
        response = student_client.get('/api/quizzes/missing/results')
        assert response.status_code == 404

    def test_results_show_latest_with_review(self, student_client, quiz_id):
        """Test results show latest with review."""
        submit(student_client, quiz_id, [0, 0])
        submit(student_client, quiz_id, [1, 3])
        response = student_client.get(f'/api/quizzes/{quiz_id}/results')
        assert response.status_code == 200
        data = response.get_json()
        assert data['quiz']['id'] == quiz_id
        assert data['submission']['selectedIndices'] == [1, 3]
        assert data['submission']['score'] == 1
        review = data['review']
        assert [item['isCorrect'] for item in review] == [True, False]
        assert [item['correctIndex'] for item in review] == [1, 2]
        assert review[1]['selectedIndex'] == 3

    def test_teacher_cannot_view_student_results(self, teacher_client, quiz_id):
        """Test teacher cannot view student results."""
        response = teacher_client.get(f'/api/quizzes/{quiz_id}/results')
        assert response.status_code == 403


class TestQuizVisibility:
    """Quiz reads for both roles."""

    def test_student_sees_active_quizzes_without_answers(self, student_client, add_quiz):
        """Test student sees active quizzes without answers."""
        active = add_quiz(title='Active')
        add_quiz(title='Hidden', is_active=False)
        response = student_client.get('/api/quizzes')
        assert response.status_code == 200
        quizzes = response.get_json()['quizzes']
        assert [quiz['id'] for quiz in quizzes] == [active]
        for question in quizzes[0]['questions']:
            assert 'correctIndex' not in question

    def test_teacher_sees_all_quizzes_with_answers(self, teacher_client, add_quiz):
        """Test teacher sees all quizzes with answers."""
        add_quiz(title='Active')
        add_quiz(title='Hidden', is_active=False)
        quizzes = teacher_client.get('/api/quizzes').get_json()['quizzes']
        assert len(quizzes) == 2
        assert quizzes[0]['questions'][0]['correctIndex'] == 1

    def test_student_fetches_quiz_content(self, student_client, add_quiz):
        """Test student fetches quiz content."""
        quiz_id = add_quiz(time_limit_seconds=120)
        response = student_client.get(f'/api/quizzes/{quiz_id}')
        assert response.status_code == 200
        quiz = response.get_json()['quiz']
        assert quiz['timeLimitSeconds'] == 120
        assert quiz['questions'][1]['options'] == ['5', '7', '6', '8']
        assert 'correctIndex' not in quiz['questions'][1]

    def test_inactive_quiz_is_hidden_from_students(self, student_client, add_quiz):
        """Test inactive quiz is hidden from students."""
        quiz_id = add_quiz(is_active=False)
        assert student_client.get(f'/api/quizzes/{quiz_id}').status_code == 404

    def test_quizzes_require_login(self, client):
        """Test quizzes require login."""
        assert client.get('/api/quizzes').status_code == 401
