import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from src.api.utils.jwt import create_session_token, verify_session_token
from src.app.services.session_issuer import ISessionIssuer

logger = logging.getLogger(__name__)


class JwtSessionIssuer(ISessionIssuer):
    """Stateless sessions carried as a signed JWT in the session cookie"""

    def __init__(self, secret: str, ttl: timedelta):
        self.secret = secret
        self.ttl = ttl

    async def create_session(self, user_id: UUID) -> str:
        token = create_session_token(user_id, self.ttl, secret=self.secret)
        logger.info(f"Session created for user {user_id}")
        return token

    def resolve_session(self, credential: str) -> Optional[UUID]:
        payload = verify_session_token(credential, secret=self.secret)
        if payload is None:
            return None
        try:
            return UUID(payload["user_id"])
        except (KeyError, ValueError):
            return None
