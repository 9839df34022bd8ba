from datetime import datetime
from decimal import Decimal

from personal_color.analysis.exceptions import (
    AnalysisNotFoundError,
    ForbiddenAnalysisAccessError,
    InternalAnalysisError,
)
from personal_color.analysis.models import (
    RELIABLE_CONFIDENCE,
    AnalysisRecord,
    ColorType,
    MonthlyCount,
    Page,
    PageRequest,
    User,
)
from personal_color.classification.base import BaseColorClassifier
from personal_color.classification.exceptions import ClassificationError
from personal_color.classification.factory import ClassifierFactory
from personal_color.classification.validator import validate_result
from personal_color.config.settings import Settings
from personal_color.database.repositories.base import BaseAnalysisRepository
from personal_color.database.repositories.factory import RepositoryFactory
from personal_color.logging.logger import Log
from personal_color.storage.exceptions import StorageError
from personal_color.storage.path_safe_store import PathSafeStore
from personal_color.upload.models import UploadedFile
from personal_color.upload.validator import UploadValidator
from personal_color.worker.executor import BoundedAnalysisExecutor
from personal_color.worker.handle import AnalysisHandle


class AnalysisPipeline:
    """Orchestrates the color analysis flow.

    Submission: validate -> store -> (worker) classify -> persist.
    Validation and storage run on the caller's thread so that rejected
    uploads never leave a file or record behind. A classification failure
    keeps the stored file; the upload can simply be submitted again.
    """

    def __init__(
        self,
        validator: UploadValidator,
        store: PathSafeStore,
        classifier: BaseColorClassifier,
        repository: BaseAnalysisRepository,
        executor: BoundedAnalysisExecutor,
    ) -> None:
        self._validator = validator
        self._store = store
        self._classifier = classifier
        self._repository = repository
        self._executor = executor

    def submit(self, user: User, upload: UploadedFile) -> AnalysisHandle:
        """Validate and store the upload, then classify it on a worker.

        Raises:
            UploadValidationError: if the upload is rejected.
            StorageError: if the bytes cannot be stored safely.
            AnalysisRejectedError: if the worker pool is saturated.
        """
        self._validator.validate(upload)
        original_name = upload.original_name or ""
        stored_name = self._store.store(upload.content, original_name)

        handle = AnalysisHandle(stored_name)
        future = self._executor.submit(
            self._run_submission,
            handle,
            user,
            original_name,
            stored_name,
            len(upload.content),
            upload.content_type,
        )
        handle.attach(future)
        Log.info(f"Analysis submitted for user {user.email}: {stored_name}")
        return handle

    def classify_and_persist(
        self,
        user: User,
        original_name: str,
        stored_name: str,
        file_size: int | None = None,
        content_type: str | None = None,
    ) -> AnalysisRecord:
        """Classify a stored file and save the record. Blocks the calling thread.

        Raises:
            ClassificationError: if the classifier fails or breaks its contract.
            InternalAnalysisError: on any other failure, with a correlation id.
        """
        Log.info(f"Analysis started - user: {user.email}, file: {original_name}")
        try:
            result = validate_result(self._classifier.classify(stored_name))
            record = AnalysisRecord(
                user_id=user.id,
                original_file_name=original_name,
                stored_file_name=stored_name,
                color_type=result.color_type,
                confidence=result.confidence,
                description=result.description,
                palette=result.palette,
                file_size=file_size if file_size is not None else self._store.size(stored_name),
                content_type=content_type,
                image_width=result.image_width,
                image_height=result.image_height,
            )
            saved = self._repository.save(record)
        except ClassificationError as exc:
            Log.error(
                f"Analysis failed - user: {user.email}, file: {original_name}: {exc}"
            )
            raise
        except Exception as exc:
            error = InternalAnalysisError(f"Analysis of {original_name} failed")
            Log.exception(
                f"Analysis failed [error id: {error.error_id}] - "
                f"user: {user.email}, file: {original_name}: {exc}"
            )
            raise error from exc

        Log.info(
            f"Analysis complete - id: {saved.id}, color type: "
            f"{saved.color_type.display_name}, confidence: {saved.confidence_percent}%"
        )
        return saved

    def get_user_analyses(self, user: User) -> list[AnalysisRecord]:
        return self._repository.find_by_user(user.id)

    def get_user_analyses_page(self, user: User, page_request: PageRequest) -> Page:
        return self._repository.find_page_by_user(user.id, page_request)

    def get_latest(self, user: User) -> AnalysisRecord | None:
        return self._repository.find_latest_by_user(user.id)

    def get_by_id(self, analysis_id: int) -> AnalysisRecord:
        """Raises AnalysisNotFoundError if the record does not exist."""
        record = self._repository.find_by_id(analysis_id)
        if record is None:
            raise AnalysisNotFoundError(analysis_id)
        return record

    def delete(self, analysis_id: int, user: User) -> None:
        """Delete an analysis owned by user, and its stored file when possible.

        The file removal is best-effort; the record is always removed.

        Raises:
            AnalysisNotFoundError: if the record does not exist (or was just deleted).
            ForbiddenAnalysisAccessError: if user does not own the record.
        """
        record = self.get_by_id(analysis_id)
        if record.user_id != user.id:
            Log.warning(
                f"User {user.email} attempted to delete analysis {analysis_id} "
                f"owned by user {record.user_id}"
            )
            raise ForbiddenAnalysisAccessError(analysis_id, user.id)

        try:
            self._store.delete(record.stored_file_name)
        except StorageError as exc:
            Log.warning(f"File deletion failed: {record.stored_file_name}: {exc}")

        if not self._repository.delete_by_id(analysis_id):
            raise AnalysisNotFoundError(analysis_id)
        Log.info(f"Analysis deleted - id: {analysis_id}, user: {user.email}")

    def get_user_analyses_between(
        self,
        user: User,
        start: datetime,
        end: datetime,
    ) -> list[AnalysisRecord]:
        return self._repository.find_by_user_and_date_range(user.id, start, end)

    def get_recent_analyses(self, since: datetime) -> list[AnalysisRecord]:
        return self._repository.find_recent(since)

    def get_analyses_by_color_type(self, color_type: ColorType) -> list[AnalysisRecord]:
        return self._repository.find_by_color_type(color_type)

    def get_top_by_confidence(
        self,
        page_request: PageRequest,
        min_confidence: Decimal = RELIABLE_CONFIDENCE,
    ) -> Page:
        return self._repository.find_top_by_confidence(min_confidence, page_request)

    def is_stored_file_referenced(self, stored_name: str) -> bool:
        return self._repository.exists_by_stored_file_name(stored_name)

    def get_color_type_statistics(self) -> dict[ColorType, int]:
        return self._repository.color_type_statistics()

    def get_user_color_type_statistics(self, user: User) -> dict[ColorType, int]:
        return self._repository.user_color_type_statistics(user.id)

    def get_most_frequent_color_type(self, user: User) -> ColorType | None:
        return self._repository.most_frequent_color_type_by_user(user.id)

    def get_user_analysis_count(self, user: User) -> int:
        return self._repository.count_by_user(user.id)

    def get_average_confidence(self) -> Decimal | None:
        return self._repository.average_confidence()

    def get_user_average_confidence(self, user: User) -> Decimal | None:
        return self._repository.average_confidence_by_user(user.id)

    def get_monthly_statistics(self, since: datetime) -> list[MonthlyCount]:
        return self._repository.monthly_statistics(since)

    def count_analyses_by_period(self, start: datetime, end: datetime) -> int:
        return self._repository.count_by_period(start, end)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run_submission(
        self,
        handle: AnalysisHandle,
        user: User,
        original_name: str,
        stored_name: str,
        file_size: int,
        content_type: str | None,
    ) -> AnalysisRecord:
        handle.mark_running()
        return self.classify_and_persist(
            user, original_name, stored_name, file_size, content_type
        )


def build_pipeline(
    settings: Settings,
    repository: BaseAnalysisRepository | None = None,
) -> AnalysisPipeline:
    """Build an AnalysisPipeline with all required adapters."""
    store = PathSafeStore(settings.upload_dir)
    store.init()
    validator = UploadValidator(
        max_size_bytes=settings.max_file_size_bytes,
        allowed_extensions=settings.allowed_extensions,
    )
    classifier = ClassifierFactory.create(settings, store)
    executor = BoundedAnalysisExecutor(
        max_workers=settings.analysis_max_workers,
        queue_capacity=settings.analysis_queue_capacity,
        thread_name_prefix=settings.analysis_thread_name_prefix,
    )
    return AnalysisPipeline(
        validator=validator,
        store=store,
        classifier=classifier,
        repository=repository if repository is not None else RepositoryFactory.create(settings),
        executor=executor,
    )
