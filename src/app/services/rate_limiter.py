from abc import ABC, abstractmethod


class IRateLimiter(ABC):
    """Counter keyed by identity with a resetting window"""

    @abstractmethod
    def check_and_increment(self, key: str) -> bool:
        """
        Record one attempt for ``key``.

        Returns:
            True if the attempt is allowed, False if the key is over its limit.
            A refused attempt is not counted.
        """
        pass
