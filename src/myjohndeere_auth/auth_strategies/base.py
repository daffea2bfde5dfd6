# auth_strategies/base.py

from abc import ABC, abstractmethod
from typing import Any


class BaseAuthStrategy(ABC):
    """
    Base class for all authentication strategies
    All strategies must implement this interface
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    async def authenticate(self, credentials: dict[str, Any]) -> dict[str, Any]:
        """
        Authenticate user with provided credentials

        Args:
            credentials: Dictionary containing authentication credentials

        Returns:
            Dictionary containing user information

        Raises:
            AuthenticationError: If authentication fails
        """
        pass

    async def prepare_credentials(self, raw_credentials: dict[str, Any]) -> dict[str, Any]:
        """
        Prepare and sanitize credentials before authentication
        Can be overridden by specific strategies

        Args:
            raw_credentials: Raw credentials from request

        Returns:
            Prepared credentials dictionary
        """
        return raw_credentials
