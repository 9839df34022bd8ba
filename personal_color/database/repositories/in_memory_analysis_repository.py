import itertools
import threading
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from personal_color.analysis.models import (
    AnalysisRecord,
    ColorType,
    MonthlyCount,
    Page,
    PageRequest,
    quantize_confidence,
)
from personal_color.database.repositories.base import BaseAnalysisRepository


def _newest_first(records: Iterable[AnalysisRecord]) -> list[AnalysisRecord]:
    return sorted(
        records,
        key=lambda r: (r.analyzed_at or datetime.min, r.id or 0),
        reverse=True,
    )


def _average(records: list[AnalysisRecord]) -> Decimal | None:
    if not records:
        return None
    total = sum((r.confidence for r in records), Decimal(0))
    return quantize_confidence(total / len(records))


class InMemoryAnalysisRepository(BaseAnalysisRepository):
    """Thread-safe keyed store for development and tests."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._records: dict[int, AnalysisRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._clock = clock

    def save(self, record: AnalysisRecord) -> AnalysisRecord:
        with self._lock:
            saved = replace(
                record,
                id=next(self._ids),
                analyzed_at=record.analyzed_at or self._clock(),
            )
            self._records[saved.id] = saved
        return saved

    def find_by_id(self, analysis_id: int) -> AnalysisRecord | None:
        with self._lock:
            return self._records.get(analysis_id)

    def find_by_user(self, user_id: int) -> list[AnalysisRecord]:
        return _newest_first(self._select(lambda r: r.user_id == user_id))

    def find_page_by_user(self, user_id: int, page_request: PageRequest) -> Page:
        return self._paginate(self.find_by_user(user_id), page_request)

    def find_latest_by_user(self, user_id: int) -> AnalysisRecord | None:
        records = self.find_by_user(user_id)
        return records[0] if records else None

    def delete_by_id(self, analysis_id: int) -> bool:
        with self._lock:
            return self._records.pop(analysis_id, None) is not None

    def exists_by_stored_file_name(self, stored_file_name: str) -> bool:
        return bool(self._select(lambda r: r.stored_file_name == stored_file_name))

    def find_by_color_type(self, color_type: ColorType) -> list[AnalysisRecord]:
        return _newest_first(self._select(lambda r: r.color_type == color_type))

    def find_by_user_and_date_range(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
    ) -> list[AnalysisRecord]:
        return _newest_first(
            self._select(
                lambda r: r.user_id == user_id and self._within(r, start, end)
            )
        )

    def find_recent(self, since: datetime) -> list[AnalysisRecord]:
        return _newest_first(
            self._select(lambda r: r.analyzed_at is not None and r.analyzed_at >= since)
        )

    def find_top_by_confidence(
        self,
        min_confidence: Decimal,
        page_request: PageRequest,
    ) -> Page:
        matching = self._select(lambda r: r.confidence >= min_confidence)
        ordered = sorted(
            _newest_first(matching), key=lambda r: r.confidence, reverse=True
        )
        return self._paginate(ordered, page_request)

    def count_by_user(self, user_id: int) -> int:
        return len(self._select(lambda r: r.user_id == user_id))

    def count_by_period(self, start: datetime, end: datetime) -> int:
        return len(self._select(lambda r: self._within(r, start, end)))

    def color_type_statistics(self) -> dict[ColorType, int]:
        return dict(Counter(r.color_type for r in self._select(lambda r: True)))

    def user_color_type_statistics(self, user_id: int) -> dict[ColorType, int]:
        counts = Counter(r.color_type for r in self._select(lambda r: r.user_id == user_id))
        return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0].value)))

    def most_frequent_color_type_by_user(self, user_id: int) -> ColorType | None:
        statistics = self.user_color_type_statistics(user_id)
        return next(iter(statistics), None)

    def average_confidence(self) -> Decimal | None:
        return _average(self._select(lambda r: True))

    def average_confidence_by_user(self, user_id: int) -> Decimal | None:
        return _average(self._select(lambda r: r.user_id == user_id))

    def monthly_statistics(self, since: datetime) -> list[MonthlyCount]:
        counts = Counter(
            (r.analyzed_at.year, r.analyzed_at.month)
            for r in self.find_recent(since)
            if r.analyzed_at is not None
        )
        return [
            MonthlyCount(year=year, month=month, count=count)
            for (year, month), count in sorted(counts.items())
        ]

    def _select(self, predicate: Callable[[AnalysisRecord], bool]) -> list[AnalysisRecord]:
        with self._lock:
            return [r for r in self._records.values() if predicate(r)]

    @staticmethod
    def _within(record: AnalysisRecord, start: datetime, end: datetime) -> bool:
        return record.analyzed_at is not None and start <= record.analyzed_at <= end

    @staticmethod
    def _paginate(records: list[AnalysisRecord], page_request: PageRequest) -> Page:
        start = page_request.offset
        return Page(
            items=records[start : start + page_request.size],
            page=page_request.page,
            size=page_request.size,
            total=len(records),
        )
