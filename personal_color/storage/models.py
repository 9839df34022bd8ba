from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StoredFile:
    """A file persisted under a generated name inside the storage root."""

    stored_name: str
    size_bytes: int
    created_at: datetime
