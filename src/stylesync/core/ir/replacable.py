"""
The code-template-replacable capability.

Anything the template engine can render implements this protocol: styles,
changelog entries and the provenance header lines. The engine only needs to
know which declaration block an item belongs to and how each placeholder key
is substituted for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

GENERATED_FILE_HEADER_DECLARATION = "generatedFileHeader"


@runtime_checkable
class CodeTemplateReplacable(Protocol):
    """An item that can be expanded into a template's declaration block."""

    @property
    def declaration_name(self) -> str:
        """Name of the ``<declarationName>`` block this item expands into."""
        ...

    @property
    def replacement_dictionary(self) -> dict[str, str]:
        """Mapping from placeholder key to its substitution value."""
        ...

    @property
    def ignored_update_attributes(self) -> frozenset[str]:
        """Placeholder keys excluded when diffing two versions of this item."""
        ...

    @property
    def is_deprecated(self) -> bool:
        """Whether the item is deprecated (drives ``<#?deprecated=...#>``)."""
        ...


@dataclass(frozen=True)
class HeaderLine:
    """A line of text shown in the header of every generated file."""

    header_line: str

    @property
    def declaration_name(self) -> str:
        return GENERATED_FILE_HEADER_DECLARATION

    @property
    def replacement_dictionary(self) -> dict[str, str]:
        return {"headerLine": self.header_line}

    @property
    def ignored_update_attributes(self) -> frozenset[str]:
        return frozenset()

    @property
    def is_deprecated(self) -> bool:
        return False


__all__ = [
    "GENERATED_FILE_HEADER_DECLARATION",
    "CodeTemplateReplacable",
    "HeaderLine",
]
