"""
Error and diagnostic types for stylesync.

Two channels exist:
- Exceptions (``StyleSyncError`` and subclasses) for structural problems that
  make a run meaningless, e.g. a template without a file extension.
- ``Diagnostic`` records for data-quality problems that degrade gracefully,
  e.g. a single malformed style or an unresolved placeholder. These are
  returned to the caller alongside the partial output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class StyleSyncError(Exception):
    """Base exception for all stylesync errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class TemplateError(StyleSyncError):
    """
    Raised when a code template is structurally unusable.

    Examples:
    - Missing file extension metadata
    """

    pass


class MissingFileExtensionError(TemplateError):
    """Raised when a template has no ``<#@fileExtension#>`` line."""

    def __init__(self, source: Path | str | None = None):
        where = f" in {source}" if source else ""
        super().__init__(
            f"No file extension found{where}. "
            "Add a line containing <#@fileExtension#> followed by the extension."
        )


class GenerationError(StyleSyncError):
    """
    Raised when the template engine is called with invalid groups.

    Examples:
    - An empty group of replacable items
    - A group mixing different declaration names
    """

    pass


class StyleParseError(StyleSyncError):
    """Raised when a single decoded style record is malformed."""

    def __init__(self, style_name: str, reason: str):
        self.style_name = style_name
        self.reason = reason
        super().__init__(f"Failed to parse style '{style_name}': {reason}")


class SnapshotDecodeError(StyleSyncError):
    """Raised when the previously exported styles snapshot cannot be read."""

    pass


class ConfigError(StyleSyncError):
    """Raised when stylesync.toml is missing or invalid."""

    pass


class ExportError(StyleSyncError):
    """Raised when generated output or the snapshot cannot be written."""

    pass


@dataclass
class ErrorContext:
    """
    Location information for an error.

    Attributes:
        file: Path of the file involved
        line: Optional line number (1-indexed)
    """

    file: Path
    line: int | None = None

    def format(self) -> str:
        """Format as ``file:line`` or just ``file``."""
        if self.line is not None:
            return f"{self.file}:{self.line}"
        return str(self.file)


class DiagnosticKind(StrEnum):
    """Kinds of non-fatal problems reported during a run."""

    UNRESOLVED_PLACEHOLDER = "unresolved_placeholder"
    UNTERMINATED_DECLARATION = "unterminated_declaration"
    STYLE_PARSE_FAILURE = "style_parse_failure"
    SNAPSHOT_DECODE_FAILURE = "snapshot_decode_failure"
    DEPRECATED_REFERENCE = "deprecated_reference"


@dataclass(frozen=True)
class Diagnostic:
    """
    A non-fatal problem, returned to the caller instead of aborting.

    Attributes:
        kind: What went wrong
        message: Human-readable description
        line: Zero-based line offset in generated output, when relevant
        source: File or style the diagnostic refers to, when relevant
    """

    kind: DiagnosticKind
    message: str
    line: int | None = None
    source: str | None = None

    def format(self) -> str:
        """Format as a single human-readable line."""
        location = ""
        if self.source:
            location = f"{self.source}: "
        if self.line is not None:
            location += f"line {self.line}: "
        return f"{location}{self.message}"


__all__ = [
    "StyleSyncError",
    "TemplateError",
    "MissingFileExtensionError",
    "GenerationError",
    "StyleParseError",
    "SnapshotDecodeError",
    "ConfigError",
    "ExportError",
    "ErrorContext",
    "DiagnosticKind",
    "Diagnostic",
]
