import argparse
import mimetypes
from pathlib import Path

from personal_color.analysis.models import User
from personal_color.analysis.pipeline import build_pipeline
from personal_color.config.settings import Settings
from personal_color.database.connection import close_pool, init_pool
from personal_color.logging.logger import Log
from personal_color.upload.models import UploadedFile


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a color type analysis on one image")
    parser.add_argument("image", type=Path, help="Path of the image to analyze")
    parser.add_argument("--user-id", type=int, required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--timeout", type=float, default=60.0, help="Seconds to wait")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point: load settings -> build pipeline -> submit -> wait for the record."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    use_postgres = settings.repository_backend.lower() == "postgres"
    if use_postgres:
        init_pool(settings)

    try:
        pipeline = build_pipeline(settings)
        try:
            content_type, _ = mimetypes.guess_type(args.image.name)
            upload = UploadedFile.from_bytes(
                args.image.read_bytes(), args.image.name, content_type
            )
            handle = pipeline.submit(User(id=args.user_id, email=args.email), upload)
            record = handle.result(timeout=args.timeout)
            Log.info(
                f"Analysis {record.id}: {record.color_type.display_name} "
                f"({record.confidence_percent}%, reliable={record.is_reliable}), "
                f"stored as {record.stored_file_name}"
            )
        finally:
            pipeline.shutdown()
    finally:
        if use_postgres:
            close_pool()


if __name__ == "__main__":
    main()
