from dataclasses import dataclass
from decimal import Decimal

from personal_color.analysis.models import ColorType, Palette


@dataclass(frozen=True)
class ClassificationResult:
    """Output of a classifier for one stored image."""

    color_type: ColorType
    confidence: Decimal
    description: str
    palette: Palette
    image_width: int | None = None
    image_height: int | None = None
