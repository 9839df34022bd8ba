"""Checks classifier output against the result contract."""

from decimal import Decimal

from personal_color.analysis.models import ColorType, Palette
from personal_color.classification.exceptions import ClassificationError
from personal_color.classification.models import ClassificationResult


def validate_result(result: ClassificationResult) -> ClassificationResult:
    """Return the result unchanged when it honors the contract.

    Raises:
        ClassificationError: on an unknown color type, an out-of-range
            confidence or a malformed palette.
    """
    if not isinstance(result.color_type, ColorType):
        raise ClassificationError(f"Unknown color type: {result.color_type!r}")
    if not isinstance(result.confidence, Decimal):
        raise ClassificationError("Confidence must be a Decimal")
    if not Decimal(0) <= result.confidence <= Decimal(1):
        raise ClassificationError(f"Confidence out of range [0, 1]: {result.confidence}")
    if not isinstance(result.palette, Palette):
        raise ClassificationError("Palette must be a Palette instance")
    try:
        Palette.from_dict(result.palette.to_dict())
    except ValueError as exc:
        raise ClassificationError(f"Invalid palette: {exc}") from exc
    if not isinstance(result.description, str):
        raise ClassificationError("Description must be a string")
    return result
