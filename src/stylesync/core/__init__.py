"""Core stylesync functionality: style IR, change detection, snapshots, configuration."""

from . import ir
from .changes import StyleChangeSet, StyleParser, detect_style_changes
from .errors import (
    ConfigError,
    Diagnostic,
    DiagnosticKind,
    ErrorContext,
    ExportError,
    GenerationError,
    MissingFileExtensionError,
    SnapshotDecodeError,
    StyleParseError,
    StyleSyncError,
    TemplateError,
)
from .manifest import ProjectManifest, load_manifest
from .state import StyleSnapshot, clear_snapshot, load_snapshot, read_snapshot, save_snapshot
from .versioning import FIRST_VERSION, StyleVersion, next_version

__all__ = [
    "ir",
    "StyleSyncError",
    "TemplateError",
    "MissingFileExtensionError",
    "GenerationError",
    "StyleParseError",
    "SnapshotDecodeError",
    "ConfigError",
    "ExportError",
    "ErrorContext",
    "Diagnostic",
    "DiagnosticKind",
    "StyleParser",
    "StyleChangeSet",
    "detect_style_changes",
    "StyleSnapshot",
    "load_snapshot",
    "read_snapshot",
    "save_snapshot",
    "clear_snapshot",
    "StyleVersion",
    "FIRST_VERSION",
    "next_version",
    "ProjectManifest",
    "load_manifest",
]
