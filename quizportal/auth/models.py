from datetime import datetime, timezone
from flask_login import UserMixin

from quizportal import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(db.Model, UserMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    # --- User Type (Student/Teacher) ---
    user_type = db.Column(db.String(20), nullable=False, default="student")  # 'student' or 'teacher'

    full_name = db.Column(db.String(255), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User {self.email} ({self.user_type})>"

    def is_student(self) -> bool:
        return self.user_type == "student"

    def is_teacher(self) -> bool:
        return self.user_type == "teacher"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.full_name,
            "role": self.user_type,
        }
