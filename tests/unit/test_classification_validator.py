from dataclasses import replace
from decimal import Decimal

import pytest

from personal_color.analysis.models import ColorType, Palette
from personal_color.classification.exceptions import ClassificationError
from personal_color.classification.models import ClassificationResult
from personal_color.classification.palettes import PALETTES, describe
from personal_color.classification.validator import validate_result


def _result(**overrides: object) -> ClassificationResult:
    result = ClassificationResult(
        color_type=ColorType.NEUTRAL,
        confidence=Decimal("0.8000"),
        description=describe(ColorType.NEUTRAL),
        palette=PALETTES[ColorType.NEUTRAL],
    )
    return replace(result, **overrides)


class TestValidateResult:
    def test_returns_valid_result(self) -> None:
        result = _result()
        assert validate_result(result) is result

    @pytest.mark.parametrize("confidence", [Decimal("0"), Decimal("1"), Decimal("0.3")])
    def test_accepts_full_unit_range(self, confidence: Decimal) -> None:
        validate_result(_result(confidence=confidence))

    @pytest.mark.parametrize("confidence", [Decimal("-0.0001"), Decimal("1.0001")])
    def test_rejects_out_of_range_confidence(self, confidence: Decimal) -> None:
        with pytest.raises(ClassificationError, match="out of range"):
            validate_result(_result(confidence=confidence))

    def test_rejects_float_confidence(self) -> None:
        with pytest.raises(ClassificationError, match="Decimal"):
            validate_result(_result(confidence=0.8))

    def test_rejects_unknown_color_type(self) -> None:
        with pytest.raises(ClassificationError, match="Unknown color type"):
            validate_result(_result(color_type="SPRING"))

    def test_rejects_palette_with_non_string_tokens(self) -> None:
        palette = Palette(primary=("#FFFFFF",), secondary=(1,), accent=())  # type: ignore[arg-type]

        with pytest.raises(ClassificationError, match="Invalid palette"):
            validate_result(_result(palette=palette))


class TestPalettes:
    def test_every_color_type_has_palette_and_description(self) -> None:
        for color_type in ColorType:
            assert set(PALETTES[color_type].to_dict()) == {"primary", "secondary", "accent"}
            assert describe(color_type)
