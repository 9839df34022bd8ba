from datetime import datetime
from decimal import Decimal
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from personal_color.analysis.models import (
    AnalysisRecord,
    ColorType,
    MonthlyCount,
    Page,
    PageRequest,
    Palette,
    quantize_confidence,
)
from personal_color.database.connection import get_connection
from personal_color.database.repositories.base import BaseAnalysisRepository

_COLUMNS = """
    id, user_id, original_file_name, stored_file_name, color_type, confidence,
    description, recommended_colors, analyzed_at, file_size, content_type,
    image_width, image_height
"""

_NEWEST_FIRST = "ORDER BY analyzed_at DESC, id DESC"


def _row_to_record(row: dict[str, Any]) -> AnalysisRecord:
    return AnalysisRecord(
        id=row["id"],
        user_id=row["user_id"],
        original_file_name=row["original_file_name"],
        stored_file_name=row["stored_file_name"],
        color_type=ColorType(row["color_type"]),
        confidence=Decimal(row["confidence"]),
        description=row["description"] or "",
        palette=Palette.from_dict(row["recommended_colors"]),
        analyzed_at=row["analyzed_at"],
        file_size=row["file_size"],
        content_type=row["content_type"],
        image_width=row["image_width"],
        image_height=row["image_height"],
    )


class PostgresAnalysisRepository(BaseAnalysisRepository):
    """Database operations for the color_analyses table."""

    def save(self, record: AnalysisRecord) -> AnalysisRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO color_analyses
                    (user_id, original_file_name, stored_file_name, color_type,
                     confidence, description, recommended_colors, analyzed_at,
                     file_size, content_type, image_width, image_height)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, COALESCE(%s::timestamp, LOCALTIMESTAMP),
                            %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        record.user_id,
                        record.original_file_name,
                        record.stored_file_name,
                        record.color_type.value,
                        record.confidence,
                        record.description,
                        Jsonb(record.palette.to_dict()),
                        record.analyzed_at,
                        record.file_size,
                        record.content_type,
                        record.image_width,
                        record.image_height,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT into color_analyses returned no row")
        return _row_to_record(row)

    def find_by_id(self, analysis_id: int) -> AnalysisRecord | None:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM color_analyses WHERE id = %s",
            (analysis_id,),
        )
        return _row_to_record(rows[0]) if rows else None

    def find_by_user(self, user_id: int) -> list[AnalysisRecord]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM color_analyses WHERE user_id = %s {_NEWEST_FIRST}",
            (user_id,),
        )
        return [_row_to_record(row) for row in rows]

    def find_page_by_user(self, user_id: int, page_request: PageRequest) -> Page:
        rows = self._fetch_all(
            f"""
            SELECT {_COLUMNS} FROM color_analyses
            WHERE user_id = %s
            {_NEWEST_FIRST}
            LIMIT %s OFFSET %s
            """,
            (user_id, page_request.size, page_request.offset),
        )
        return Page(
            items=[_row_to_record(row) for row in rows],
            page=page_request.page,
            size=page_request.size,
            total=self.count_by_user(user_id),
        )

    def find_latest_by_user(self, user_id: int) -> AnalysisRecord | None:
        rows = self._fetch_all(
            f"""
            SELECT {_COLUMNS} FROM color_analyses
            WHERE user_id = %s
            {_NEWEST_FIRST}
            LIMIT 1
            """,
            (user_id,),
        )
        return _row_to_record(rows[0]) if rows else None

    def delete_by_id(self, analysis_id: int) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM color_analyses WHERE id = %s", (analysis_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted

    def exists_by_stored_file_name(self, stored_file_name: str) -> bool:
        rows = self._fetch_all(
            "SELECT 1 AS found FROM color_analyses WHERE stored_file_name = %s LIMIT 1",
            (stored_file_name,),
        )
        return bool(rows)

    def find_by_color_type(self, color_type: ColorType) -> list[AnalysisRecord]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM color_analyses WHERE color_type = %s {_NEWEST_FIRST}",
            (color_type.value,),
        )
        return [_row_to_record(row) for row in rows]

    def find_by_user_and_date_range(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
    ) -> list[AnalysisRecord]:
        rows = self._fetch_all(
            f"""
            SELECT {_COLUMNS} FROM color_analyses
            WHERE user_id = %s AND analyzed_at BETWEEN %s AND %s
            {_NEWEST_FIRST}
            """,
            (user_id, start, end),
        )
        return [_row_to_record(row) for row in rows]

    def find_recent(self, since: datetime) -> list[AnalysisRecord]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM color_analyses WHERE analyzed_at >= %s {_NEWEST_FIRST}",
            (since,),
        )
        return [_row_to_record(row) for row in rows]

    def find_top_by_confidence(
        self,
        min_confidence: Decimal,
        page_request: PageRequest,
    ) -> Page:
        rows = self._fetch_all(
            f"""
            SELECT {_COLUMNS} FROM color_analyses
            WHERE confidence >= %s
            ORDER BY confidence DESC, analyzed_at DESC, id DESC
            LIMIT %s OFFSET %s
            """,
            (min_confidence, page_request.size, page_request.offset),
        )
        total = self._fetch_scalar(
            "SELECT COUNT(*) FROM color_analyses WHERE confidence >= %s",
            (min_confidence,),
        )
        return Page(
            items=[_row_to_record(row) for row in rows],
            page=page_request.page,
            size=page_request.size,
            total=int(total or 0),
        )

    def count_by_user(self, user_id: int) -> int:
        count = self._fetch_scalar(
            "SELECT COUNT(*) FROM color_analyses WHERE user_id = %s",
            (user_id,),
        )
        return int(count or 0)

    def count_by_period(self, start: datetime, end: datetime) -> int:
        count = self._fetch_scalar(
            "SELECT COUNT(*) FROM color_analyses WHERE analyzed_at BETWEEN %s AND %s",
            (start, end),
        )
        return int(count or 0)

    def color_type_statistics(self) -> dict[ColorType, int]:
        rows = self._fetch_all(
            """
            SELECT color_type, COUNT(*) AS total
            FROM color_analyses
            GROUP BY color_type
            """,
            (),
        )
        return {ColorType(row["color_type"]): row["total"] for row in rows}

    def user_color_type_statistics(self, user_id: int) -> dict[ColorType, int]:
        rows = self._fetch_all(
            """
            SELECT color_type, COUNT(*) AS total
            FROM color_analyses
            WHERE user_id = %s
            GROUP BY color_type
            ORDER BY total DESC, color_type
            """,
            (user_id,),
        )
        return {ColorType(row["color_type"]): row["total"] for row in rows}

    def most_frequent_color_type_by_user(self, user_id: int) -> ColorType | None:
        statistics = self.user_color_type_statistics(user_id)
        return next(iter(statistics), None)

    def average_confidence(self) -> Decimal | None:
        average = self._fetch_scalar("SELECT AVG(confidence) FROM color_analyses", ())
        return quantize_confidence(average) if average is not None else None

    def average_confidence_by_user(self, user_id: int) -> Decimal | None:
        average = self._fetch_scalar(
            "SELECT AVG(confidence) FROM color_analyses WHERE user_id = %s",
            (user_id,),
        )
        return quantize_confidence(average) if average is not None else None

    def monthly_statistics(self, since: datetime) -> list[MonthlyCount]:
        rows = self._fetch_all(
            """
            SELECT EXTRACT(YEAR FROM analyzed_at)::int AS year,
                   EXTRACT(MONTH FROM analyzed_at)::int AS month,
                   COUNT(*) AS total
            FROM color_analyses
            WHERE analyzed_at >= %s
            GROUP BY 1, 2
            ORDER BY 1, 2
            """,
            (since,),
        )
        return [
            MonthlyCount(year=row["year"], month=row["month"], count=row["total"])
            for row in rows
        ]

    @staticmethod
    def _fetch_all(query: str, params: tuple[Any, ...]) -> list[dict[str, Any]]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                return cur.fetchall()

    @staticmethod
    def _fetch_scalar(query: str, params: tuple[Any, ...]) -> Any:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                row = cur.fetchone()
        return row[0] if row is not None else None
