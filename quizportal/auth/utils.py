import re

from flask import current_app
from passlib.hash import bcrypt
from quizportal.config import config


EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEMO_USERS = (
    ("student@example.com", "student123", "Demo Student", "student"),
    ("teacher@example.com", "teacher123", "Demo Teacher", "teacher"),
)


def _truncate_password(plain_password: str) -> str:
    """Helper to consistently truncate password to its first 72 UTF-8 bytes."""
    password_bytes = plain_password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(plain_password: str) -> str:
    """
    Hash password using bcrypt. It is truncated to the first 72 bytes
    of its UTF-8 encoding before hashing.
    """
    truncated = _truncate_password(plain_password)
    return bcrypt.hash(truncated)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against a hash, using the same truncation as hash_password."""
    truncated = _truncate_password(plain_password)
    return bcrypt.verify(truncated, password_hash)


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_REGEX.match(email))


def validate_password(password: str) -> tuple[bool, str | None]:
    """
    Basic server-side password validation.
    Returns (is_valid, error_message).
    """
    min_length = config.MIN_PASSWORD_LENGTH
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters long"
    return True, None


def seed_demo_users() -> int:
    """Create the demo student and teacher accounts when they are missing."""
    from quizportal import db
    from quizportal.auth.models import User

    created = 0
    for email, password, full_name, user_type in DEMO_USERS:
        if User.query.filter_by(email=email).first():
            continue
        db.session.add(User(
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            user_type=user_type,
        ))
        created += 1
    if created:
        db.session.commit()
        current_app.logger.info(f"Seeded {created} demo user(s)")
    return created
