"""
Business logic services for authentication.

Services encapsulate business rules and coordinate between
token issuance and the user model.
"""

from .auth_service import AuthService
from .results import LoginResult, RegisterResult, Result


__all__ = [
    "AuthService",
    "LoginResult",
    "RegisterResult",
    "Result",
]
