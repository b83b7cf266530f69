"""
Style IR types.

A style is a named design token exported from a design tool. Two concrete
variants exist, colors and text styles; the set is closed. Both are frozen
pydantic models so that every transformation returns a new value.

Two notions of sameness are kept apart:
- ``==`` compares every field, including ``is_deprecated``.
- ``is_same_style`` compares identifiers only, which is how a style is
  recognised across export runs even after a rename.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..strings import camelcased, round_to_two_decimal_places


def _format_number(value: float, places: int = 2) -> str:
    return str(round(float(value), places))


class Style(BaseModel, ABC):
    """Fields and behaviour shared by every style variant."""

    model_config = ConfigDict(frozen=True)

    declaration_name: ClassVar[str] = ""
    ignored_update_attributes: ClassVar[frozenset[str]] = frozenset()

    name: str = Field(description="Display name chosen by the designer")
    identifier: str = Field(description="Stable id assigned by the design tool")
    is_deprecated: bool = Field(
        default=False,
        description="True once the style is gone upstream but still emitted",
    )

    @property
    def deprecated(self) -> Self:
        """A copy of this style marked as deprecated."""
        return self.model_copy(update={"is_deprecated": True})

    @property
    def code_name(self) -> str:
        """The identifier generated code uses for this style."""
        return camelcased(self.name)

    def is_same_style(self, other: Style) -> bool:
        """Whether ``other`` is a version of this style (identifier match)."""
        return self.identifier == other.identifier

    @property
    @abstractmethod
    def replacement_dictionary(self) -> dict[str, str]:
        """Mapping from placeholder key to its rendered value."""
        ...


class ColorStyle(Style):
    """
    A named color.

    Red, green and blue are fractions in [0, 1] snapped to the 0-255 grid on
    construction, so a color read back from a snapshot equals the color that
    was written.
    """

    declaration_name: ClassVar[str] = "colorDeclaration"

    red: float = Field(ge=0.0, le=1.0)
    green: float = Field(ge=0.0, le=1.0)
    blue: float = Field(ge=0.0, le=1.0)
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)

    @field_validator("red", "green", "blue", mode="after")
    @classmethod
    def _snap_to_byte_grid(cls, value: float) -> float:
        return round(value * 255) / 255

    @property
    def rgba_255(self) -> tuple[int, int, int, float]:
        """Red, green and blue quantized to 0-255; alpha unchanged."""
        return (
            round(self.red * 255),
            round(self.green * 255),
            round(self.blue * 255),
            self.alpha,
        )

    @property
    def hex(self) -> str:
        red, green, blue, alpha = self.rgba_255
        value = f"#{red:02X}{green:02X}{blue:02X}"
        if alpha < 1:
            value += f"{round(alpha * 255):02X}"
        return value

    @property
    def component_dictionary(self) -> dict[str, str]:
        return {
            "red": _format_number(self.red, 3),
            "green": _format_number(self.green, 3),
            "blue": _format_number(self.blue, 3),
            "alpha": _format_number(self.alpha, 3),
            "hex": self.hex,
        }

    @property
    def replacement_dictionary(self) -> dict[str, str]:
        return {
            "name": self.name,
            "colorName": self.code_name,
            **self.component_dictionary,
        }

    @classmethod
    def matching(cls, color: ColorStyle, styles: Iterable[ColorStyle]) -> ColorStyle | None:
        """First style in ``styles`` whose quantized components equal ``color``'s."""
        return next((style for style in styles if style.rgba_255 == color.rgba_255), None)


class TextStyle(Style):
    """A named text style with an embedded text color."""

    declaration_name: ClassVar[str] = "textStyleDeclaration"

    font_name: str
    point_size: float
    kerning: float = 0.0
    line_height: float
    color_style: ColorStyle

    @field_validator("point_size", "kerning", "line_height", mode="after")
    @classmethod
    def _round_measurement(cls, value: float) -> float:
        return round_to_two_decimal_places(value)

    @property
    def replacement_dictionary(self) -> dict[str, str]:
        return {
            "name": self.name,
            "textStyleName": self.code_name,
            "fontName": self.font_name,
            "pointSize": _format_number(self.point_size),
            "kerning": _format_number(self.kerning),
            "lineHeight": _format_number(self.line_height),
            "colorName": self.color_style.code_name,
            **self.color_style.component_dictionary,
        }


__all__ = [
    "Style",
    "ColorStyle",
    "TextStyle",
]
