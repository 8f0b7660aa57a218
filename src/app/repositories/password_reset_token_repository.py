from abc import ABC, abstractmethod
from datetime import datetime
from typing import List
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def list_unexpired(self, now: datetime) -> List[PasswordResetToken]:
        """
        List tokens whose expires_at is strictly after ``now``.

        Order is stable (oldest first) so a scan over the candidates is
        deterministic.
        """
        pass

    @abstractmethod
    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every token owned by a user. Returns count of deleted rows."""
        pass
