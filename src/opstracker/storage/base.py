from abc import ABC, abstractmethod
from typing import Optional


class BlobStore(ABC):
    """Abstract key-value store holding one text blob per key."""

    def connect(self) -> None:
        """Establish connection to the storage backend."""

    def close(self) -> None:
        """Close the connection."""

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the backend is reachable."""
        pass

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None when absent."""
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """
        Store blob under key, replacing any previous value.

        Raises:
            PersistenceWriteError: the backend rejected the write
        """
        pass
