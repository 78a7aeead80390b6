"""
Database models for quiz functionality.

Quizzes hold an ordered list of multiple-choice questions. The position
of a question inside its quiz is the index every answer array refers to,
so questions are never reordered once the quiz exists.
"""
from datetime import datetime, timezone
from uuid import uuid4
from quizportal import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


def to_iso(value: datetime | None) -> str | None:
    """Serialize a timestamp as ISO-8601 UTC; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class Quiz(db.Model):
    """Model for a multiple-choice quiz authored by a teacher."""
    __tablename__ = "quizzes"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    time_limit_seconds = db.Column(db.Integer, nullable=True)  # None means untimed
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='SET NULL'), nullable=True)

    # Relationships
    creator = db.relationship("User", foreign_keys=[created_by])
    questions = db.relationship(
        "Question",
        backref="quiz",
        cascade="all, delete-orphan",
        order_by="Question.position",
    )
    submissions = db.relationship("Submission", backref="quiz", lazy="dynamic")

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def get_question_count(self) -> int:
        return len(self.questions)

    def to_dict(self, include_answers: bool = True) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'timeLimitSeconds': self.time_limit_seconds,
            'isActive': self.is_active,
            'questionCount': self.get_question_count(),
            'createdAt': to_iso(self.created_at),
            'questions': [q.to_dict(include_answer=include_answers) for q in self.questions],
        }


class Question(db.Model):
    """Model for a single multiple-choice question of a quiz."""
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.String(32), db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False)
    text = db.Column(db.Text, nullable=False)
    options = db.Column(db.JSON, nullable=False)  # list of option strings, at least two
    correct_index = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('quiz_id', 'position', name='uq_quiz_question_position'),
    )

    def __repr__(self) -> str:
        return f"<Question {self.quiz_id}#{self.position}>"

    def to_dict(self, include_answer: bool = True) -> dict:
        data = {
            'text': self.text,
            'options': list(self.options),
        }
        if include_answer:
            data['correctIndex'] = self.correct_index
        return data


class Submission(db.Model):
    """
    Model for a scored quiz submission.

    Rows are only ever inserted; the score is computed server-side at
    submission time and never updated afterwards.
    """
    __tablename__ = "quiz_submissions"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    quiz_id = db.Column(db.String(32), db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    student_email = db.Column(db.String(255), nullable=True)
    selected_indices = db.Column(db.JSON, nullable=False)
    score = db.Column(db.Integer, nullable=False)
    total = db.Column(db.Integer, nullable=False)
    on_time = db.Column(db.Boolean, nullable=False, default=True)
    started_at = db.Column(db.DateTime(timezone=True), nullable=True)  # client-reported
    time_spent_seconds = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # Relationships
    student = db.relationship("User", foreign_keys=[student_id], backref="submissions")

    __table_args__ = (
        db.Index('ix_quiz_submissions_quiz_student', 'quiz_id', 'student_id'),
    )

    def __repr__(self) -> str:
        return f"<Submission {self.id}: Student {self.student_id}, Quiz {self.quiz_id}>"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'quizId': self.quiz_id,
            'selectedIndices': list(self.selected_indices),
            'score': self.score,
            'total': self.total,
            'onTime': self.on_time,
            'startedAt': to_iso(self.started_at),
            'timeSpentSeconds': self.time_spent_seconds,
            'studentEmail': self.student_email,
            'createdAt': to_iso(self.created_at),
        }
