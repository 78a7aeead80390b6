"""
Security module for the application.

Provides the security/audit event logger used by the auth and
submission endpoints.
"""

from .security_logger import SecurityLogger

__all__ = [
    'SecurityLogger',
]
