from personal_color.classification.base import BaseColorClassifier
from personal_color.classification.placeholder_classifier import PlaceholderClassifier
from personal_color.config.settings import Settings
from personal_color.storage.path_safe_store import PathSafeStore


class ClassifierFactory:
    """Creates the configured color type classifier."""

    ENGINES: dict[str, type[PlaceholderClassifier]] = {
        "placeholder": PlaceholderClassifier,
    }

    @classmethod
    def create(cls, settings: Settings, store: PathSafeStore) -> BaseColorClassifier:
        engine = settings.classifier_engine.lower()
        engine_cls = cls.ENGINES.get(engine)
        if engine_cls is None:
            raise ValueError(
                f"Unknown classifier engine '{engine}'. Choose from: {list(cls.ENGINES)}"
            )
        return engine_cls(store)
