"""Key-Value Store Interface

Defines the contract for durable storage of named text blobs.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Storage interface for named text blobs

    Keys are independent: a failed write to one key leaves the others intact.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the blob stored under key

        Args:
            key: Storage key

        Returns:
            Stored text if present, None otherwise
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Write (insert or replace) the blob stored under key

        Args:
            key: Storage key
            value: Text to store
        """
        pass
