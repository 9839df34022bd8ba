from personal_color.config.settings import Settings
from personal_color.database.repositories.analysis_repository import PostgresAnalysisRepository
from personal_color.database.repositories.base import BaseAnalysisRepository
from personal_color.database.repositories.in_memory_analysis_repository import (
    InMemoryAnalysisRepository,
)


class RepositoryFactory:
    """Creates the analysis repository for the configured backend."""

    BACKENDS: dict[str, type[BaseAnalysisRepository]] = {
        "postgres": PostgresAnalysisRepository,
        "memory": InMemoryAnalysisRepository,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisRepository:
        backend = settings.repository_backend.lower()
        repo_cls = cls.BACKENDS.get(backend)
        if repo_cls is None:
            raise ValueError(
                f"Unknown repository backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
            )
        return repo_cls()
