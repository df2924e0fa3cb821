"""
Key-Value Storage Interface

Defines the contract for the persistence collaborator the schedule store
mirrors its collections into: a string-keyed store of serialized values,
the same shape as browser local storage.
"""

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """
    Abstract key-value storage.

    Only the schedule store calls this interface. Implementations raise
    ``StorageError`` when a read or write cannot be completed.
    """

    @abstractmethod
    def load(self, key: str) -> str | None:
        """
        Read the serialized value stored under a key.

        Args:
            key: Storage key

        Returns:
            Serialized value or None if the key is absent

        Raises:
            StorageError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """
        Store a serialized value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized value

        Raises:
            StorageError: If the backing store cannot be written
        """
        pass
