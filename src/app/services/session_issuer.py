from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID


class ISessionIssuer(ABC):
    """Creates authenticated sessions bound to a user id"""

    @abstractmethod
    async def create_session(self, user_id: UUID) -> str:
        """Create a session for the user and return its opaque credential"""
        pass

    @abstractmethod
    def resolve_session(self, credential: str) -> Optional[UUID]:
        """Return the user id a credential is bound to, or None if invalid"""
        pass
