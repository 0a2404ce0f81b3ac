class BlobStoreError(Exception):
    """Base exception for blob store failures."""


class BlobNotFoundError(BlobStoreError):
    """Raised when the requested object does not exist."""
