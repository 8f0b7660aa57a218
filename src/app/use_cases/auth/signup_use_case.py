import logging

import bcrypt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.app.services.session_issuer import ISessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .dtos import SessionUser
from .signup_dto import SignupCommand, SignupResponse
from .validation import validate_email_address, validate_password

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand
    - Output: Result[SignupResponse]

    Business Logic:
    1. Validate email and password (min 8 chars)
    2. Reject an email that is already registered
    3. Hash password with bcrypt cost factor 12
    4. Create User and commit
    5. Issue a session for the new user
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_issuer: ISessionIssuer,
        password_hash_rounds: int = 12,
    ):
        self.uow = uow
        self.session_issuer = session_issuer
        self.password_hash_rounds = password_hash_rounds

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with email, password and optional name

        Returns:
            Result[SignupResponse] with the created user,
            or Error(VALIDATION_ERROR / EMAIL_ALREADY_EXISTS / INTERNAL_ERROR)
        """
        for validation in (
            validate_email_address(command.email),
            validate_password(command.password),
        ):
            if validation.is_err():
                return Return.err(validation.error)

        already_exists = Error(
            "EMAIL_ALREADY_EXISTS", "An account with this email already exists"
        )

        try:
            async with self.uow:
                existing_user = await self.uow.users.get_by_email(command.email)
                if existing_user:
                    return Return.err(already_exists)

                password_hash = bcrypt.hashpw(
                    command.password.encode("utf-8"),
                    bcrypt.gensalt(self.password_hash_rounds),
                )

                user = await self.uow.users.create(
                    User(
                        email=command.email,
                        password_hash=password_hash.decode("utf-8"),
                        name=command.name or None,
                    )
                )
                await self.uow.commit()
        except IntegrityError:
            # Lost a race against a concurrent signup for the same email
            return Return.err(already_exists)
        except SQLAlchemyError:
            logger.exception("Signup failed")
            return Return.err(
                Error("INTERNAL_ERROR", "Failed to create account. Please try again.")
            )

        session_token = await self.session_issuer.create_session(user.id)

        return Return.ok(
            SignupResponse(
                user=SessionUser(id=str(user.id), email=user.email, name=user.name),
                session_token=session_token,
            )
        )
