"""Deterministic stand-in for a real color type model.

The color type comes from the stored name's hash and the confidence is drawn
uniformly from [0.70, 0.95]. The image itself is only opened to confirm it
decodes and to read its dimensions.
"""

import random

from PIL import Image

from personal_color.analysis.models import ColorType, quantize_confidence
from personal_color.classification.base import BaseColorClassifier
from personal_color.classification.exceptions import ClassificationError
from personal_color.classification.models import ClassificationResult
from personal_color.classification.palettes import describe, recommend_palette
from personal_color.storage.path_safe_store import PathSafeStore

MIN_CONFIDENCE = 0.70
MAX_CONFIDENCE = 0.95


def java_string_hash(value: str) -> int:
    """32-bit signed hash over UTF-16 code units, as java.lang.String computes it."""
    encoded = value.encode("utf-16-be")
    h = 0
    for i in range(0, len(encoded), 2):
        h = (31 * h + int.from_bytes(encoded[i : i + 2], "big")) & 0xFFFFFFFF
    return h - (1 << 32) if h & 0x80000000 else h


def color_type_for(stored_name: str) -> ColorType:
    types = list(ColorType)
    return types[abs(java_string_hash(stored_name)) % len(types)]


class PlaceholderClassifier(BaseColorClassifier):
    """Assigns a color type from the file name hash."""

    def __init__(self, store: PathSafeStore, rng: random.Random | None = None) -> None:
        self._store = store
        self._rng = rng or random.Random()

    def classify(self, stored_name: str) -> ClassificationResult:
        width, height = self._read_dimensions(stored_name)
        color_type = color_type_for(stored_name)
        confidence = quantize_confidence(self._rng.uniform(MIN_CONFIDENCE, MAX_CONFIDENCE))
        return ClassificationResult(
            color_type=color_type,
            confidence=confidence,
            description=describe(color_type),
            palette=recommend_palette(color_type),
            image_width=width,
            image_height=height,
        )

    def _read_dimensions(self, stored_name: str) -> tuple[int, int]:
        try:
            with self._store.open(stored_name) as stream, Image.open(stream) as image:
                width, height = image.size
                image.verify()
            return width, height
        except ClassificationError:
            raise
        except Exception as exc:
            raise ClassificationError(
                f"Stored file {stored_name} is not a readable image: {exc}"
            ) from exc
