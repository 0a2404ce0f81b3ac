from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for reading uploaded files by their storage reference."""

    @abstractmethod
    def download(self, path: str) -> bytes:
        """Return the full content of the object at ``path``.

        Raises:
            BlobNotFoundError: if nothing is stored at ``path``.
            BlobStoreError: for any other read failure.
        """
