"""
Signup Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- SignupCommand: Input to use case (business intent)
- SignupResponse: Output from use case (structured result)
"""

from typing import Optional
from pydantic import BaseModel, Field

from .dtos import SessionUser


class SignupCommand(BaseModel):
    """
    Signup command - represents signup intent

    Created by API layer from the HTTP payload.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    name: Optional[str] = None


class SignupResponse(BaseModel):
    """
    Signup response - structured output from use case

    session_token is set as the session cookie by the API layer.
    """

    success: bool = True
    user: SessionUser
    session_token: Optional[str] = Field(default=None, exclude=True)
