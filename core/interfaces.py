"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for string key-value storage.

    Implementations raise StorageUnavailable when the backing store
    cannot be reached, read or written.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value for key, or None if nothing was stored."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the value stored under key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        pass
