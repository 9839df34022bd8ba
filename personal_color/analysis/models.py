from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from enum import Enum

RELIABLE_CONFIDENCE = Decimal("0.70")
_CONFIDENCE_SCALE = Decimal("0.0001")
_PALETTE_TIERS = ("primary", "secondary", "accent")


class ColorType(str, Enum):
    """Seasonal color-temperature grouping assigned by the classifier."""

    SPRING_WARM = "SPRING_WARM"
    SUMMER_COOL = "SUMMER_COOL"
    AUTUMN_WARM = "AUTUMN_WARM"
    WINTER_COOL = "WINTER_COOL"
    NEUTRAL = "NEUTRAL"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def tone(self) -> str:
        return _TONES[self]


_DISPLAY_NAMES = {
    ColorType.SPRING_WARM: "Spring Warm",
    ColorType.SUMMER_COOL: "Summer Cool",
    ColorType.AUTUMN_WARM: "Autumn Warm",
    ColorType.WINTER_COOL: "Winter Cool",
    ColorType.NEUTRAL: "Neutral",
}

_TONES = {
    ColorType.SPRING_WARM: "bright and warm",
    ColorType.SUMMER_COOL: "soft and cool",
    ColorType.AUTUMN_WARM: "deep and warm",
    ColorType.WINTER_COOL: "vivid and cool",
    ColorType.NEUTRAL: "between warm and cool",
}


def quantize_confidence(value: float | Decimal) -> Decimal:
    """Round a confidence to 4 decimal places, half-up."""
    return Decimal(str(value)).quantize(_CONFIDENCE_SCALE, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Palette:
    """Recommended color tokens grouped into primary/secondary/accent tiers."""

    primary: tuple[str, ...]
    secondary: tuple[str, ...]
    accent: tuple[str, ...]

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "primary": list(self.primary),
            "secondary": list(self.secondary),
            "accent": list(self.accent),
        }

    @classmethod
    def from_dict(cls, data: dict[str, list[str]]) -> "Palette":
        """Build a palette from a mapping with exactly the three tier keys.

        Raises:
            ValueError: if the keys differ or a tier is not a list of strings.
        """
        if set(data) != set(_PALETTE_TIERS):
            raise ValueError(
                f"Palette must have exactly the keys {list(_PALETTE_TIERS)}, got {sorted(data)}"
            )
        tiers: dict[str, tuple[str, ...]] = {}
        for tier in _PALETTE_TIERS:
            tokens = data[tier]
            if not isinstance(tokens, (list, tuple)) or not all(
                isinstance(token, str) for token in tokens
            ):
                raise ValueError(f"Palette tier '{tier}' must be a list of strings")
            tiers[tier] = tuple(tokens)
        return cls(**tiers)


@dataclass(frozen=True)
class User:
    """Opaque acting identity supplied by the caller's identity context."""

    id: int
    email: str


@dataclass(frozen=True)
class AnalysisRecord:
    """Durable result of one submission. Immutable once persisted."""

    user_id: int
    original_file_name: str
    stored_file_name: str
    color_type: ColorType
    confidence: Decimal
    description: str
    palette: Palette
    id: int | None = None
    analyzed_at: datetime | None = None
    file_size: int | None = None
    content_type: str | None = None
    image_width: int | None = None
    image_height: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.color_type, ColorType):
            raise ValueError(f"Unknown color type: {self.color_type!r}")
        if not Decimal(0) <= self.confidence <= Decimal(1):
            raise ValueError(f"Confidence must be within [0, 1], got {self.confidence}")

    @property
    def confidence_percent(self) -> int:
        return int((self.confidence * 100).to_integral_value(rounding=ROUND_DOWN))

    @property
    def is_reliable(self) -> bool:
        return self.confidence >= RELIABLE_CONFIDENCE


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page selector."""

    page: int = 0
    size: int = 20

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page:
    """One page of analysis records plus the total across all pages."""

    items: list[AnalysisRecord] = field(default_factory=list)
    page: int = 0
    size: int = 20
    total: int = 0

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages


@dataclass(frozen=True)
class MonthlyCount:
    """Number of analyses created in one calendar month."""

    year: int
    month: int
    count: int
