"""
Get Session User Use Case

Resolves the session cookie to the signed-in user.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.session_issuer import ISessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import SessionStatusResponse, SessionUser

logger = logging.getLogger(__name__)


class GetSessionUserUseCase:
    """
    Use case for checking the current session.

    Business Rules:
    - Session credential must verify and not be expired
    - The user it is bound to must still exist
    """

    def __init__(self, uow: UnitOfWork, session_issuer: ISessionIssuer):
        self.uow = uow
        self.session_issuer = session_issuer

    async def execute(self, credential: Optional[str]) -> Result[SessionStatusResponse]:
        unauthenticated = Error("UNAUTHENTICATED", "Not signed in")

        if not credential:
            return Return.err(unauthenticated)

        user_id = self.session_issuer.resolve_session(credential)
        if user_id is None:
            return Return.err(unauthenticated)

        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
        except SQLAlchemyError:
            logger.exception("Session lookup failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to check session"))

        if user is None:
            return Return.err(unauthenticated)

        return Return.ok(
            SessionStatusResponse(
                authenticated=True,
                user=SessionUser(id=str(user.id), email=user.email, name=user.name),
            )
        )
