"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .signup_dto import SignupCommand, SignupResponse
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .get_session_user_use_case import GetSessionUserUseCase
from .dtos import (
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
    SessionStatusResponse,
    SessionUser,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "GetSessionUserUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "SignupResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
    "SessionStatusResponse",
    # DTOs - Nested Models
    "SessionUser",
]
