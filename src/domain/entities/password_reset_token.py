"""
PasswordResetToken Entity

Single-use password reset tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - single-use password reset tokens.

    Business Rules:
    - Expires 30 minutes after issuance
    - token_hash is a bcrypt hash of 32 random bytes (hex encoded);
      the raw token is only ever sent by email
    - Issuing a token deletes every earlier token of the same user
    - Consuming a token deletes every token of the same user
    - Expired rows are ignored at lookup and removed on the next issuance
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id")
    token_hash: str = Field(max_length=60)  # Bcrypt output

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_user_id", "user_id"),
    )
