from datetime import datetime
from typing import List
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def list_unexpired(self, now: datetime) -> List[PasswordResetToken]:
        """List tokens that have not expired yet, oldest first"""
        stmt = (
            select(PasswordResetToken)
            .where(PasswordResetToken.expires_at > now)
            .order_by(PasswordResetToken.created_at, PasswordResetToken.id)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every token owned by a user"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
