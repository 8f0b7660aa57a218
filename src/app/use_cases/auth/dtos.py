"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
"""

from typing import Optional
from pydantic import BaseModel, Field


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    success: bool = True
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """
    Response for confirm password reset use case

    session_token is handed to the API layer for the session cookie and is
    never serialized into the response body.
    """

    success: bool = True
    message: str
    session_token: Optional[str] = Field(default=None, exclude=True)


class SessionUser(BaseModel):
    """User exposed to the client for the current session"""

    id: str
    email: str
    name: Optional[str] = None


class SessionStatusResponse(BaseModel):
    """Response for session lookup use case"""

    authenticated: bool
    user: Optional[SessionUser] = None
