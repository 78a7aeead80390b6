from functools import wraps
from flask import jsonify, request
from flask_login import current_user

from quizportal.security import SecurityLogger


def _unauthenticated():
    SecurityLogger.log_unauthorized_access(request.path)
    return jsonify({'success': False, 'error': 'Authentication required'}), 401


def _forbidden():
    SecurityLogger.log_unauthorized_access(request.path, current_user.id)
    return jsonify({'success': False, 'error': 'Forbidden'}), 403


def api_login_required(f):
    """Decorator to require login for an API route."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return _unauthenticated()
        return f(*args, **kwargs)
    return decorated_function


def role_required(*roles):
    """Decorator to require one of the given roles for an API route."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return _unauthenticated()
            if current_user.user_type not in roles:
                return _forbidden()
            return f(*args, **kwargs)
        return decorated_function
    return decorator


student_required = role_required('student')
teacher_required = role_required('teacher')
