from abc import ABC, abstractmethod


class NotificationError(Exception):
    """Raised when an outbound message could not be delivered"""


class INotifier(ABC):
    """Outbound user notifications"""

    @abstractmethod
    async def send_password_reset_link(self, email: str, raw_token: str) -> None:
        """
        Deliver a one-time password reset link.

        Args:
            email: Recipient address
            raw_token: Unhashed reset token to embed in the link

        Raises:
            NotificationError: Delivery failed
        """
        pass
