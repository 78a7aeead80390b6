"""
Security logging module.

This module provides specialized logging for security and audit events
such as failed logins, unauthorized access and quiz submissions.
"""

from flask import request, current_app, has_request_context
from datetime import datetime, timezone
import json


def _remote_addr() -> str:
    if has_request_context():
        return request.remote_addr or 'unknown'
    return 'n/a'


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SecurityLogger:
    """
    Security event logger.

    Logs security-related events for monitoring and auditing.
    """

    @staticmethod
    def log_failed_login(email: str, reason: str = "Invalid credentials"):
        """
        Log a failed login attempt.

        Args:
            email: Email address used in login attempt
            reason: Reason for failure
        """
        current_app.logger.warning(
            f"SECURITY: Failed login attempt - Email: {email}, "
            f"IP: {_remote_addr()}, Reason: {reason}, "
            f"Time: {_now_iso()}"
        )

    @staticmethod
    def log_successful_login(user_id: int, email: str):
        """
        Log a successful login.

        Args:
            user_id: User ID
            email: User email
        """
        current_app.logger.info(
            f"SECURITY: Successful login - User ID: {user_id}, "
            f"Email: {email}, IP: {_remote_addr()}, "
            f"Time: {_now_iso()}"
        )

    @staticmethod
    def log_unauthorized_access(resource: str, user_id: int = None):
        """
        Log unauthorized access attempt.

        Args:
            resource: Resource that was accessed
            user_id: User ID if authenticated
        """
        user_info = f"User ID: {user_id}" if user_id else "Unauthenticated"
        current_app.logger.warning(
            f"SECURITY: Unauthorized access - {user_info}, "
            f"Resource: {resource}, IP: {_remote_addr()}, "
            f"Time: {_now_iso()}"
        )

    @staticmethod
    def log_quiz_submission(user_id: int, details: dict):
        """
        Log a scored quiz submission.

        Args:
            user_id: Student ID
            details: Quiz id, score, total, on-time flag and time spent
        """
        current_app.logger.info(
            f"SECURITY: Quiz submission - User ID: {user_id}, "
            f"IP: {_remote_addr()}, Details: {json.dumps(details, default=str)}, "
            f"Time: {_now_iso()}"
        )

    @staticmethod
    def log_rejected_submission(user_id: int, quiz_id: str, reason: str):
        """
        Log a submission that was refused before scoring.

        Args:
            user_id: Student ID
            quiz_id: Quiz the student tried to submit
            reason: Why the submission was refused
        """
        current_app.logger.warning(
            f"SECURITY: Submission rejected - User ID: {user_id}, "
            f"Quiz: {quiz_id}, Reason: {reason}, IP: {_remote_addr()}, "
            f"Time: {_now_iso()}"
        )
