"""Traversal-safe flat file storage.

Callers only ever hand back the opaque stored name returned by ``store``;
no filesystem path is ever built from client input.
"""

import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from personal_color.logging.logger import Log
from personal_color.storage.exceptions import (
    PathTraversalError,
    StorageIOError,
    StoredFileNotFoundError,
)
from personal_color.storage.models import StoredFile
from personal_color.upload.validator import file_extension

_SAFE_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")
_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def clean_filename(filename: str) -> str:
    """Normalize separators and drop empty and current-directory segments."""
    segments = filename.replace("\\", "/").split("/")
    cleaned = [segment for segment in segments if segment not in ("", ".")]
    return "/".join(cleaned)


def generate_stored_name(extension: str, now: datetime | None = None) -> str:
    """Build '{yyyyMMdd_HHmmss}_{8 hex}{extension}'."""
    timestamp = (now or datetime.now()).strftime(_TIMESTAMP_FORMAT)
    return f"{timestamp}_{uuid.uuid4().hex[:8]}{extension}"


class PathSafeStore:
    """Persists, reads and deletes uploaded bytes inside a single root directory."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def init(self) -> None:
        """Create the storage root if it does not exist yet.

        Raises:
            StorageIOError: if the directory cannot be created.
        """
        if self._root.is_dir():
            return
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(f"Failed to create storage root {self._root}: {exc}") from exc
        Log.info(f"Created storage root: {self._root}")

    def store(self, content: bytes, original_name: str) -> str:
        """Write content under a freshly generated name and return that name.

        Raises:
            PathTraversalError: if original_name contains a '..' segment.
            StorageIOError: if the bytes cannot be written.
        """
        cleaned = clean_filename(original_name)
        if ".." in cleaned.split("/"):
            Log.critical(f"Path traversal attempt rejected: {original_name!r}")
            raise PathTraversalError(
                f"File name contains a parent directory reference: {original_name}"
            )

        extension = file_extension(cleaned.rsplit("/", 1)[-1])
        if not _SAFE_EXTENSION.match(extension):
            extension = ""

        stored_name = generate_stored_name(extension)
        target = self._resolve(stored_name)
        try:
            target.write_bytes(content)
        except OSError as exc:
            raise StorageIOError(f"Failed to store file {original_name}: {exc}") from exc

        Log.info(f"Stored file: {original_name} -> {stored_name}")
        return stored_name

    def load(self, stored_name: str) -> bytes:
        """Read the full content of a stored file.

        Raises:
            StoredFileNotFoundError: if the file is missing or unreadable.
        """
        with self.open(stored_name) as stream:
            return stream.read()

    def open(self, stored_name: str) -> BinaryIO:
        """Open a stored file for binary reading. Caller closes the stream.

        Raises:
            StoredFileNotFoundError: if the file is missing or unreadable.
        """
        path = self._resolve(stored_name)
        if not path.is_file():
            raise StoredFileNotFoundError(stored_name)
        try:
            return path.open("rb")
        except OSError as exc:
            raise StoredFileNotFoundError(stored_name) from exc

    def delete(self, stored_name: str) -> None:
        """Remove a stored file. Succeeds silently when it is already gone.

        Raises:
            StorageIOError: on any filesystem failure other than not-found.
        """
        path = self._resolve(stored_name)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageIOError(f"Failed to delete file {stored_name}: {exc}") from exc
        Log.info(f"Deleted file: {stored_name}")

    def exists(self, stored_name: str) -> bool:
        """False for absent files and for names that resolve outside the root."""
        try:
            return self._resolve(stored_name).is_file()
        except PathTraversalError:
            return False

    def size(self, stored_name: str) -> int:
        """Return the byte length of a stored file.

        Raises:
            StoredFileNotFoundError: if the file does not exist.
        """
        return self.stat(stored_name).size_bytes

    def stat(self, stored_name: str) -> StoredFile:
        path = self._resolve(stored_name)
        try:
            info = path.stat()
        except FileNotFoundError as exc:
            raise StoredFileNotFoundError(stored_name) from exc
        except OSError as exc:
            raise StorageIOError(f"Failed to stat file {stored_name}: {exc}") from exc
        return StoredFile(
            stored_name=stored_name,
            size_bytes=info.st_size,
            created_at=datetime.fromtimestamp(info.st_mtime),
        )

    def _resolve(self, stored_name: str) -> Path:
        """Join with the root and verify the result stays strictly inside it."""
        try:
            path = (self._root / stored_name).resolve()
        except ValueError as exc:
            raise PathTraversalError(f"Invalid stored name: {stored_name!r}") from exc
        if path == self._root or not path.is_relative_to(self._root):
            Log.critical(f"Stored name resolves outside storage root: {stored_name!r}")
            raise PathTraversalError(f"Stored name escapes storage root: {stored_name}")
        return path
