"""Base authentication provider interface for slides-writer."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseAuthProvider(ABC):
    """Base class for authentication providers"""

    @property
    @abstractmethod
    def scopes(self) -> list[str]:
        """Required OAuth scopes for this provider"""
        pass

    @abstractmethod
    async def authenticate(self) -> Any:
        """Run the interactive OAuth flow and return the new credentials"""
        pass

    @abstractmethod
    async def load_cached_credentials(self) -> Optional[Any]:
        """Return previously stored credentials, if any"""
        pass
