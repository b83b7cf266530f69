"""
stylesync - versioned code generation for design styles.

Turns color and text styles exported from a design tool into source code,
carrying removed styles forward as deprecated and tracking renames across
exports.
"""

from __future__ import annotations

from ._version import get_version
from .codegen import CodeGenerator, GenerationResult
from .core import ir
from .core.errors import (
    Diagnostic,
    DiagnosticKind,
    MissingFileExtensionError,
    SnapshotDecodeError,
    StyleSyncError,
)
from .exporter import ExportDestinations, ExportResult, StyleExporter

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CodeGenerator",
    "GenerationResult",
    "StyleExporter",
    "ExportDestinations",
    "ExportResult",
    "StyleSyncError",
    "MissingFileExtensionError",
    "SnapshotDecodeError",
    "Diagnostic",
    "DiagnosticKind",
]
