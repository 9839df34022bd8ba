from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest

from personal_color.analysis.models import AnalysisRecord, ColorType, MonthlyCount, PageRequest
from personal_color.classification.palettes import PALETTES
from personal_color.database.repositories.analysis_repository import PostgresAnalysisRepository


def make_record(
    user_id: int,
    color_type: ColorType = ColorType.SUMMER_COOL,
    confidence: str = "0.8000",
    stored_name: str = "20240101_120000_abcdef12.png",
    **overrides: Any,
) -> AnalysisRecord:
    return AnalysisRecord(
        user_id=user_id,
        original_file_name="photo.png",
        stored_file_name=stored_name,
        color_type=color_type,
        confidence=Decimal(confidence),
        description="integration test",
        palette=PALETTES[color_type],
        **overrides,
    )


@pytest.mark.integration
class TestAnalysisRepositorySave:
    def test_save_assigns_id_and_timestamp(self, user_ids: tuple[int, int]) -> None:
        repo = PostgresAnalysisRepository()

        saved = repo.save(make_record(user_ids[0], file_size=2048, content_type="image/png"))

        assert saved.id is not None
        assert saved.analyzed_at is not None
        assert saved.file_size == 2048
        assert saved.palette == PALETTES[ColorType.SUMMER_COOL]
        assert repo.find_by_id(saved.id) == saved

    def test_palette_is_stored_as_jsonb(self, user_ids: tuple[int, int], db_conn) -> None:
        saved = PostgresAnalysisRepository().save(make_record(user_ids[0]))
        with db_conn.cursor() as cur:
            cur.execute(
                "SELECT recommended_colors FROM color_analyses WHERE id = %s",
                (saved.id,),
            )
            row = cur.fetchone()
        assert row is not None
        assert set(row[0]) == {"primary", "secondary", "accent"}

    def test_find_by_id_returns_none_when_absent(self, user_ids: tuple[int, int]) -> None:
        assert PostgresAnalysisRepository().find_by_id(-1) is None


@pytest.mark.integration
class TestAnalysisRepositoryUserQueries:
    def test_find_by_user_newest_first(self, user_ids: tuple[int, int]) -> None:
        repo = PostgresAnalysisRepository()
        old = repo.save(make_record(user_ids[0], analyzed_at=datetime(2024, 1, 1)))
        new = repo.save(make_record(user_ids[0], analyzed_at=datetime(2024, 6, 1)))
        repo.save(make_record(user_ids[1]))

        records = repo.find_by_user(user_ids[0])

        assert [r.id for r in records] == [new.id, old.id]
        assert repo.find_latest_by_user(user_ids[0]) == new

    def test_find_page_by_user(self, user_ids: tuple[int, int]) -> None:
        repo = PostgresAnalysisRepository()
        for month in (1, 2, 3):
            repo.save(make_record(user_ids[0], analyzed_at=datetime(2024, month, 1)))

        page = repo.find_page_by_user(user_ids[0], PageRequest(page=1, size=2))

        assert page.total == 3
        assert [r.analyzed_at for r in page.items] == [datetime(2024, 1, 1)]

    def test_delete_by_id(self, user_ids: tuple[int, int]) -> None:
        repo = PostgresAnalysisRepository()
        saved = repo.save(make_record(user_ids[0]))

        assert repo.delete_by_id(saved.id) is True  # type: ignore[arg-type]
        assert repo.delete_by_id(saved.id) is False  # type: ignore[arg-type]

    def test_exists_by_stored_file_name(self, user_ids: tuple[int, int]) -> None:
        repo = PostgresAnalysisRepository()
        repo.save(make_record(user_ids[0], stored_name="20990101_000000_0badf00d.png"))

        assert repo.exists_by_stored_file_name("20990101_000000_0badf00d.png")


@pytest.mark.integration
class TestAnalysisRepositoryAggregates:
    def test_user_statistics(self, user_ids: tuple[int, int]) -> None:
        repo = PostgresAnalysisRepository()
        user_id = user_ids[0]
        repo.save(make_record(user_id, ColorType.NEUTRAL, "0.7000", analyzed_at=datetime(2024, 1, 5)))
        repo.save(make_record(user_id, ColorType.NEUTRAL, "0.8000", analyzed_at=datetime(2024, 1, 20)))
        repo.save(make_record(user_id, ColorType.WINTER_COOL, "0.9000", analyzed_at=datetime(2024, 2, 1)))

        assert repo.count_by_user(user_id) == 3
        assert list(repo.user_color_type_statistics(user_id).items()) == [
            (ColorType.NEUTRAL, 2),
            (ColorType.WINTER_COOL, 1),
        ]
        assert repo.most_frequent_color_type_by_user(user_id) == ColorType.NEUTRAL
        assert repo.average_confidence_by_user(user_id) == Decimal("0.8000")
        assert len(
            repo.find_by_user_and_date_range(user_id, datetime(2024, 1, 1), datetime(2024, 1, 31))
        ) == 2

    def test_average_confidence_without_records(self, user_ids: tuple[int, int]) -> None:
        assert PostgresAnalysisRepository().average_confidence_by_user(user_ids[1]) is None

    def test_monthly_statistics_includes_new_month(self, user_ids: tuple[int, int]) -> None:
        repo = PostgresAnalysisRepository()
        repo.save(make_record(user_ids[0], analyzed_at=datetime(2099, 5, 10)))

        statistics = repo.monthly_statistics(datetime(2099, 1, 1))

        assert MonthlyCount(year=2099, month=5, count=1) in statistics
