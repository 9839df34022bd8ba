class UploadValidationError(Exception):
    """Base exception for rejected uploads. Always caused by client input."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class EmptyFileError(UploadValidationError):
    """Raised when the uploaded file has no content."""

    def __init__(self) -> None:
        super().__init__("Uploaded file is empty")


class SizeExceededError(UploadValidationError):
    """Raised when the declared size is above the configured maximum."""

    def __init__(self, actual: int, maximum: int) -> None:
        self.actual = actual
        self.maximum = maximum
        super().__init__(f"File size {actual} exceeds the maximum of {maximum} bytes")


class MissingNameError(UploadValidationError):
    """Raised when the upload carries no usable file name."""

    def __init__(self) -> None:
        super().__init__("Uploaded file has no name")


class DisallowedExtensionError(UploadValidationError):
    """Raised when the file extension is not in the allow-list."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"File extension '{extension}' is not allowed")
