from abc import ABC, abstractmethod

from personal_color.classification.models import ClassificationResult


class BaseColorClassifier(ABC):
    """Contract for all color type classification engines."""

    @abstractmethod
    def classify(self, stored_name: str) -> ClassificationResult:
        """Classify the image stored under stored_name.

        Args:
            stored_name: Opaque name returned by PathSafeStore.store.

        Returns:
            ClassificationResult with exactly one of the five color types,
            a confidence in [0, 1], a description and a three-tier palette.

        Raises:
            ClassificationError: on any failure.
        """
