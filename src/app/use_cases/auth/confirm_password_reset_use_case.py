"""
Confirm Password Reset Use Case

Verifies a reset token, replaces the password and signs the user in.
"""

import logging
from datetime import datetime
from typing import List, Optional

import bcrypt
from sqlalchemy.exc import SQLAlchemyError

from src.app.services.session_issuer import ISessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PasswordResetToken
from src.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetResponse
from .validation import validate_password

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired reset token"


def _checkpw(raw: bytes, hashed: bytes) -> bool:
    try:
        return bcrypt.checkpw(raw, hashed)
    except ValueError:
        # Malformed stored hash or oversized input
        return False


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password must be at least 8 characters
    - Only unexpired tokens are candidates; each is compared with bcrypt
    - Unknown, mismatching and expired tokens produce the same error
    - Password is hashed with bcrypt (cost factor 12)
    - Password update and deletion of all the user's tokens commit together
    - A new session is issued for the user after the commit
    - The response carries no user details
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_issuer: ISessionIssuer,
        token_hash_rounds: int = 10,
        password_hash_rounds: int = 12,
    ):
        self.uow = uow
        self.session_issuer = session_issuer
        self.token_hash_rounds = token_hash_rounds
        self.password_hash_rounds = password_hash_rounds

    def _find_match(
        self, token: str, candidates: List[PasswordResetToken]
    ) -> Optional[PasswordResetToken]:
        """
        Return the first candidate whose hash matches ``token``.

        With no candidates a throwaway comparison still runs so the empty
        case costs about as much as a miss.
        """
        try:
            raw = token.encode()
        except UnicodeEncodeError:
            # Lone surrogates cannot match any issued token
            _checkpw(b"", bcrypt.gensalt(self.token_hash_rounds))
            return None

        if not candidates:
            _checkpw(raw, bcrypt.gensalt(self.token_hash_rounds))
            return None

        for candidate in candidates:
            if _checkpw(raw, candidate.token_hash.encode()):
                return candidate

        return None

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation and session credential, or Error

        Errors:
            - VALIDATION_ERROR: Empty token or password does not meet rules
            - INVALID_OR_EXPIRED_TOKEN: No unexpired token matches
            - INTERNAL_ERROR: Store failure
        """
        if not token:
            return Return.err(Error("VALIDATION_ERROR", "Token is required"))

        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        try:
            async with self.uow:
                candidates = await self.uow.password_reset_tokens.list_unexpired(
                    datetime.utcnow()
                )
                matched = self._find_match(token, candidates)

                if matched is None:
                    return Return.err(Error("INVALID_OR_EXPIRED_TOKEN", INVALID_TOKEN_MESSAGE))

                user_id = matched.user_id
                password_hash = bcrypt.hashpw(
                    new_password.encode(), bcrypt.gensalt(self.password_hash_rounds)
                )

                user_exists = await self.uow.users.update_password_hash(
                    user_id, password_hash.decode()
                )
                if not user_exists:
                    return Return.err(Error("INVALID_OR_EXPIRED_TOKEN", INVALID_TOKEN_MESSAGE))

                # Covers tokens issued concurrently with the matched one
                await self.uow.password_reset_tokens.delete_all_for_user(user_id)

                await self.uow.commit()
        except SQLAlchemyError:
            logger.exception("Password reset confirmation failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to reset password"))

        session_token = await self.session_issuer.create_session(user_id)

        return Return.ok(
            ConfirmPasswordResetResponse(
                message="Password reset successful",
                session_token=session_token,
            )
        )
