from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from personal_color.analysis.models import (
    AnalysisRecord,
    ColorType,
    MonthlyCount,
    Page,
    PageRequest,
)


class BaseAnalysisRepository(ABC):
    """Contract for durable storage of analysis records.

    Every "by user" listing is ordered newest first (analyzed_at, then id).
    Implementations must make a saved record immediately queryable.
    """

    @abstractmethod
    def save(self, record: AnalysisRecord) -> AnalysisRecord:
        """Persist a new record.

        Returns:
            The stored record with id and analyzed_at assigned.
        """

    @abstractmethod
    def find_by_id(self, analysis_id: int) -> AnalysisRecord | None:
        """Return the record with this id, or None."""

    @abstractmethod
    def find_by_user(self, user_id: int) -> list[AnalysisRecord]:
        """Return every record owned by the user, newest first."""

    @abstractmethod
    def find_page_by_user(self, user_id: int, page_request: PageRequest) -> Page:
        """Return one page of the user's records, newest first."""

    @abstractmethod
    def find_latest_by_user(self, user_id: int) -> AnalysisRecord | None:
        """Return the user's most recent record, or None."""

    @abstractmethod
    def delete_by_id(self, analysis_id: int) -> bool:
        """Delete a record. Returns False when nothing was deleted."""

    @abstractmethod
    def exists_by_stored_file_name(self, stored_file_name: str) -> bool:
        """Whether any record references this stored file."""

    @abstractmethod
    def find_by_color_type(self, color_type: ColorType) -> list[AnalysisRecord]:
        """Return all records of one color type, newest first."""

    @abstractmethod
    def find_by_user_and_date_range(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
    ) -> list[AnalysisRecord]:
        """Return the user's records analyzed within [start, end], newest first."""

    @abstractmethod
    def find_recent(self, since: datetime) -> list[AnalysisRecord]:
        """Return all records analyzed at or after since, newest first."""

    @abstractmethod
    def find_top_by_confidence(
        self,
        min_confidence: Decimal,
        page_request: PageRequest,
    ) -> Page:
        """Return records with confidence >= min_confidence, most confident first."""

    @abstractmethod
    def count_by_user(self, user_id: int) -> int:
        """Number of records owned by the user."""

    @abstractmethod
    def count_by_period(self, start: datetime, end: datetime) -> int:
        """Number of records analyzed within [start, end]."""

    @abstractmethod
    def color_type_statistics(self) -> dict[ColorType, int]:
        """Record count per color type across all users."""

    @abstractmethod
    def user_color_type_statistics(self, user_id: int) -> dict[ColorType, int]:
        """Record count per color type for one user, most frequent first."""

    @abstractmethod
    def most_frequent_color_type_by_user(self, user_id: int) -> ColorType | None:
        """The user's most frequent color type, or None without records."""

    @abstractmethod
    def average_confidence(self) -> Decimal | None:
        """Mean confidence across all records, or None without records."""

    @abstractmethod
    def average_confidence_by_user(self, user_id: int) -> Decimal | None:
        """Mean confidence of the user's records, or None without records."""

    @abstractmethod
    def monthly_statistics(self, since: datetime) -> list[MonthlyCount]:
        """Record counts per calendar month from since onwards, oldest month first."""
