class StorageError(Exception):
    """Base exception for all file storage errors."""


class PathTraversalError(StorageError):
    """Raised when a file name would resolve outside the storage root."""


class StoredFileNotFoundError(StorageError):
    """Raised when a stored file is absent or unreadable."""

    def __init__(self, stored_name: str) -> None:
        self.stored_name = stored_name
        super().__init__(f"Stored file not found: {stored_name}")


class StorageIOError(StorageError):
    """Raised when the underlying filesystem operation fails."""
