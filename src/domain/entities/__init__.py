"""
CV Match Domain Entities

Each entity in its own file.
"""

from .user import User
from .password_reset_token import PasswordResetToken

__all__ = [
    "User",
    "PasswordResetToken",
]
