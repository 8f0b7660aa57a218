"""
Request Password Reset Use Case

Issues a single-use password reset token and emails the reset link.
"""

import logging
import secrets
from datetime import datetime, timedelta

import bcrypt
from sqlalchemy.exc import SQLAlchemyError

from src.app.services.notifier import INotifier, NotificationError
from src.app.services.rate_limiter import IRateLimiter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PasswordResetToken
from src.libs.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse
from .validation import validate_email_address

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If an account exists with that email, we sent a password reset link."


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Email must be well-formed before anything else happens
    - At most N requests per email per window (in-process limiter)
    - Same response whether or not the account exists (no email enumeration)
    - Token only issued for accounts that have a password
    - Raw token is 32 random bytes, hex encoded; only its bcrypt hash is stored
    - Earlier tokens of the user are deleted in the same commit that stores
      the new one, so at most one token is valid per user
    - Token expires after 30 minutes
    - Email delivery failures are logged and do not change the response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        rate_limiter: IRateLimiter,
        notifier: INotifier,
        token_ttl: timedelta = timedelta(minutes=30),
        token_hash_rounds: int = 10,
    ):
        self.uow = uow
        self.rate_limiter = rate_limiter
        self.notifier = notifier
        self.token_ttl = token_ttl
        self.token_hash_rounds = token_hash_rounds

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Address the reset link should go to

        Returns:
            Result with the generic confirmation, or Error

        Errors:
            - VALIDATION_ERROR: Malformed email address
            - RATE_LIMITED: Too many requests for this email
            - INTERNAL_ERROR: Store failure
        """
        validation = validate_email_address(email)
        if validation.is_err():
            return Return.err(validation.error)

        if not self.rate_limiter.check_and_increment(email):
            return Return.err(
                Error("RATE_LIMITED", "Too many requests. Please try again later.")
            )

        raw_token = None
        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(email)

                if user is not None and user.has_password:
                    raw_token = secrets.token_hex(32)
                    token_hash = bcrypt.hashpw(
                        raw_token.encode(), bcrypt.gensalt(self.token_hash_rounds)
                    )

                    await self.uow.password_reset_tokens.delete_all_for_user(user.id)
                    await self.uow.password_reset_tokens.create(
                        PasswordResetToken(
                            user_id=user.id,
                            token_hash=token_hash.decode(),
                            expires_at=datetime.utcnow() + self.token_ttl,
                        )
                    )

                    # Replacement of the user's tokens is atomic
                    await self.uow.commit()
        except SQLAlchemyError:
            logger.exception("Password reset request failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to process request"))

        if raw_token is not None:
            try:
                await self.notifier.send_password_reset_link(email, raw_token)
            except NotificationError as exc:
                logger.warning(f"Password reset email not delivered: {exc}")
            except Exception:
                logger.exception("Notifier failed while sending password reset email")

        return Return.ok(RequestPasswordResetResponse(message=RESET_REQUESTED_MESSAGE))
