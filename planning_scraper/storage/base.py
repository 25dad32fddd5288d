from abc import ABC, abstractmethod


class BaseStorageBackend(ABC):
    """Contract for all document storage backends."""

    @abstractmethod
    def store(self, content: bytes, filename: str, application_id: str) -> str:
        """Persist document bytes under a logical name.

        Args:
            content: Raw document payload.
            filename: Derived document filename.
            application_id: Planning application the document belongs to.

        Returns:
            Location of the stored document (path or object URL).

        Raises:
            PersistenceError: if the document could not be stored.
        """
