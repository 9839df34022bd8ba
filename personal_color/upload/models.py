from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """A client upload as received by the caller. Consumed once, never persisted."""

    content: bytes
    original_name: str | None
    size: int
    content_type: str | None = None

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        original_name: str | None,
        content_type: str | None = None,
    ) -> "UploadedFile":
        """Build an upload whose declared size is the real byte length."""
        return cls(
            content=content,
            original_name=original_name,
            size=len(content),
            content_type=content_type,
        )

    @property
    def is_empty(self) -> bool:
        return len(self.content) == 0
