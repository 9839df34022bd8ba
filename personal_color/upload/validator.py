from collections.abc import Iterable

from personal_color.upload.exceptions import (
    DisallowedExtensionError,
    EmptyFileError,
    MissingNameError,
    SizeExceededError,
)
from personal_color.upload.models import UploadedFile

DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp")


def file_extension(filename: str) -> str:
    """Lower-cased suffix from the last '.' (dot included), '' when there is none."""
    index = filename.rfind(".")
    if index == -1:
        return ""
    return filename[index:].lower()


class UploadValidator:
    """Rejects uploads before they reach storage. Pure check, no side effects."""

    def __init__(
        self,
        max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
        allowed_extensions: Iterable[str] = DEFAULT_ALLOWED_EXTENSIONS,
    ) -> None:
        self._max_size_bytes = max_size_bytes
        self._allowed_extensions = frozenset(ext.lower() for ext in allowed_extensions)

    def validate(self, file: UploadedFile) -> None:
        """Check the upload, stopping at the first failed rule.

        Raises:
            EmptyFileError: if the file has no bytes.
            SizeExceededError: if the declared or actual size is above the maximum.
            MissingNameError: if the original name is blank.
            DisallowedExtensionError: if the extension is not allowed.
        """
        if file.is_empty:
            raise EmptyFileError()
        size = max(file.size, len(file.content))
        if size > self._max_size_bytes:
            raise SizeExceededError(size, self._max_size_bytes)
        name = file.original_name
        if name is None or not name.strip():
            raise MissingNameError()
        extension = file_extension(name)
        if extension not in self._allowed_extensions:
            raise DisallowedExtensionError(extension)
