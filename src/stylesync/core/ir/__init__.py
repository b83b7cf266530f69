"""
stylesync intermediate representation.

Style values, the replacable capability the template engine consumes, and
changelog entries.
"""

from .replacable import GENERATED_FILE_HEADER_DECLARATION, CodeTemplateReplacable, HeaderLine
from .styles import ColorStyle, Style, TextStyle
from .updates import (
    STYLE_DECLARATION,
    VERSION_DECLARATION,
    UpdatedAttribute,
    UpdatedStyle,
    VersionHeader,
)

__all__ = [
    # Styles
    "Style",
    "ColorStyle",
    "TextStyle",
    # Template capability
    "CodeTemplateReplacable",
    "HeaderLine",
    "GENERATED_FILE_HEADER_DECLARATION",
    # Changelog
    "UpdatedAttribute",
    "UpdatedStyle",
    "VersionHeader",
    "STYLE_DECLARATION",
    "VERSION_DECLARATION",
]
