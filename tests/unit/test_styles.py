"""
Unit tests for the style IR types.
"""

import pytest
from pydantic import ValidationError

from stylesync.core.ir import (
    GENERATED_FILE_HEADER_DECLARATION,
    CodeTemplateReplacable,
    ColorStyle,
    HeaderLine,
    Style,
    TextStyle,
)


# =============================================================================
# Identity
# =============================================================================


class TestStyleIdentity:
    """Equality compares every field; is_same_style compares identifiers."""

    def test_deprecated_copy_is_not_equal(self, brand_color: ColorStyle) -> None:
        deprecated = brand_color.deprecated

        assert deprecated.is_deprecated
        assert not brand_color.is_deprecated
        assert deprecated != brand_color
        assert deprecated.is_same_style(brand_color)

    def test_deprecated_is_idempotent(self, brand_color: ColorStyle) -> None:
        assert brand_color.deprecated.deprecated == brand_color.deprecated

    def test_renamed_style_is_same_style(self, brand_color: ColorStyle) -> None:
        renamed = brand_color.model_copy(update={"name": "Primary"})

        assert renamed != brand_color
        assert renamed.is_same_style(brand_color)

    def test_styles_are_hashable(self, brand_color: ColorStyle) -> None:
        same = ColorStyle(name="Brand", identifier="C1", red=0.2, green=0.4, blue=0.6)

        assert len({brand_color, same, brand_color.deprecated}) == 2

    def test_base_style_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Style(name="Plain", identifier="S1")

    def test_styles_are_frozen(self, brand_color: ColorStyle) -> None:
        with pytest.raises(ValidationError):
            brand_color.name = "Other"  # type: ignore[misc]


# =============================================================================
# ColorStyle
# =============================================================================


class TestColorStyle:
    def test_code_name(self) -> None:
        color = ColorStyle(name="Primary Blue", identifier="C9", red=0, green=0, blue=1)
        assert color.code_name == "primaryBlue"

    def test_components_snap_to_byte_grid(self) -> None:
        color = ColorStyle(name="Mid", identifier="C4", red=0.123, green=0.5, blue=0.75)

        assert color.red == 31 / 255
        assert color.green == 128 / 255
        assert color.blue == 191 / 255
        assert color.rgba_255 == (31, 128, 191, 1.0)
        assert ColorStyle(name="Mid", identifier="C4", red=color.red, green=color.green, blue=color.blue) == color

    def test_rgba_255(self, brand_color: ColorStyle) -> None:
        assert brand_color.rgba_255 == (51, 102, 153, 1.0)

    def test_hex_without_alpha(self, brand_color: ColorStyle) -> None:
        assert brand_color.hex == "#336699"

    def test_hex_with_alpha(self) -> None:
        color = ColorStyle(name="Scrim", identifier="C5", red=0, green=0, blue=0, alpha=0.4)
        assert color.hex == "#00000066"

    def test_components_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            ColorStyle(name="Bad", identifier="CX", red=1.5, green=0, blue=0)

    def test_replacement_dictionary(self, brand_color: ColorStyle) -> None:
        assert brand_color.replacement_dictionary == {
            "name": "Brand",
            "colorName": "brand",
            "red": "0.2",
            "green": "0.4",
            "blue": "0.6",
            "alpha": "1.0",
            "hex": "#336699",
        }

    def test_matching_compares_quantized_components(self, brand_color: ColorStyle) -> None:
        nearly = ColorStyle(name="Inline", identifier="X", red=0.2001, green=0.4, blue=0.6)
        other = ColorStyle(name="Other", identifier="C2", red=1, green=1, blue=1)

        assert ColorStyle.matching(nearly, [other, brand_color]) == brand_color
        assert ColorStyle.matching(other, [brand_color]) is None


# =============================================================================
# TextStyle
# =============================================================================


class TestTextStyle:
    def test_measurements_are_rounded(self, black: ColorStyle) -> None:
        style = TextStyle(
            name="Caption",
            identifier="T2",
            font_name="Inter",
            point_size=12.004,
            kerning=0.333,
            line_height=15.999,
            color_style=black,
        )

        assert style.point_size == 12.0
        assert style.kerning == 0.33
        assert style.line_height == 16.0

    def test_replacement_dictionary(self, body_text: TextStyle) -> None:
        values = body_text.replacement_dictionary

        assert values["name"] == "Body"
        assert values["textStyleName"] == "body"
        assert values["fontName"] == "Inter"
        assert values["pointSize"] == "16.0"
        assert values["kerning"] == "0.5"
        assert values["lineHeight"] == "20.0"
        assert values["colorName"] == "black"
        assert values["hex"] == "#000000"

    def test_declaration_names(self, body_text: TextStyle, black: ColorStyle) -> None:
        assert body_text.declaration_name == "textStyleDeclaration"
        assert black.declaration_name == "colorDeclaration"


class TestReplacableProtocol:
    def test_styles_and_header_lines_are_replacable(
        self, brand_color: ColorStyle, body_text: TextStyle
    ) -> None:
        header = HeaderLine("Do not edit")

        for item in (brand_color, body_text, header):
            assert isinstance(item, CodeTemplateReplacable)

        assert header.declaration_name == GENERATED_FILE_HEADER_DECLARATION
        assert header.replacement_dictionary == {"headerLine": "Do not edit"}
        assert not header.is_deprecated
