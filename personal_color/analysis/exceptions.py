import uuid


class AnalysisError(Exception):
    """Base exception for all analysis pipeline errors."""


class AnalysisNotFoundError(AnalysisError):
    """Raised when an analysis record does not exist."""

    def __init__(self, analysis_id: int) -> None:
        self.analysis_id = analysis_id
        super().__init__(f"Analysis {analysis_id} not found")


class ForbiddenAnalysisAccessError(AnalysisError):
    """Raised when a user mutates an analysis record they do not own."""

    def __init__(self, analysis_id: int, user_id: int) -> None:
        self.analysis_id = analysis_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not allowed to modify analysis {analysis_id}")


class AnalysisRejectedError(AnalysisError):
    """Raised when the worker pool cannot accept another submission."""


def generate_error_id() -> str:
    """Short random correlation id for operator diagnosis."""
    return uuid.uuid4().hex[:8]


class InternalAnalysisError(AnalysisError):
    """Wraps an unexpected failure with a correlation id."""

    def __init__(self, message: str, error_id: str | None = None) -> None:
        self.error_id = error_id or generate_error_id()
        super().__init__(f"{message} [error id: {self.error_id}]")
