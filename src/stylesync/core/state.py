"""
Snapshot persistence for versioned exports.

After each export the final style sets are written to a JSON snapshot, which
the next run reads back as the "previously exported" baseline for diffing.

Tracks:
- Style set version
- Color styles (red/green/blue as 0-255 integers, alpha as 0-1)
- Text styles (with their embedded color encoded the same way)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .errors import Diagnostic, DiagnosticKind, ExportError, SnapshotDecodeError
from .ir import ColorStyle, TextStyle
from .versioning import FIRST_VERSION, StyleVersion

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_PATH = Path(".stylesync") / "styles.json"


def encode_color_style(style: ColorStyle) -> dict[str, Any]:
    """Convert a color style to its snapshot record."""
    red, green, blue, alpha = style.rgba_255
    return {
        "name": style.name,
        "identifier": style.identifier,
        "isDeprecated": style.is_deprecated,
        "red": red,
        "green": green,
        "blue": blue,
        "alpha": alpha,
    }


def decode_color_style(data: dict[str, Any]) -> ColorStyle:
    """Create a color style from its snapshot record."""
    return ColorStyle(
        name=data["name"],
        identifier=data["identifier"],
        is_deprecated=data.get("isDeprecated", False),
        red=data["red"] / 255,
        green=data["green"] / 255,
        blue=data["blue"] / 255,
        alpha=data["alpha"],
    )


def encode_text_style(style: TextStyle) -> dict[str, Any]:
    """Convert a text style to its snapshot record."""
    return {
        "name": style.name,
        "identifier": style.identifier,
        "isDeprecated": style.is_deprecated,
        "fontName": style.font_name,
        "pointSize": style.point_size,
        "kerning": style.kerning,
        "lineHeight": style.line_height,
        "colorStyle": encode_color_style(style.color_style),
    }


def decode_text_style(data: dict[str, Any]) -> TextStyle:
    """Create a text style from its snapshot record."""
    return TextStyle(
        name=data["name"],
        identifier=data["identifier"],
        is_deprecated=data.get("isDeprecated", False),
        font_name=data["fontName"],
        point_size=data["pointSize"],
        kerning=data.get("kerning", 0),
        line_height=data["lineHeight"],
        color_style=decode_color_style(data["colorStyle"]),
    )


@dataclass
class StyleSnapshot:
    """
    The style sets written by an export.

    Used as the diff baseline for the next export.
    """

    version: StyleVersion = FIRST_VERSION
    color_styles: list[ColorStyle] = field(default_factory=list)
    text_styles: list[TextStyle] = field(default_factory=list)
    timestamp: str | None = None  # ISO format datetime

    def is_empty(self) -> bool:
        return not self.color_styles and not self.text_styles

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "version": str(self.version),
            "timestamp": self.timestamp,
            "colorStyles": [encode_color_style(s) for s in self.color_styles],
            "textStyles": [encode_text_style(s) for s in self.text_styles],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> StyleSnapshot:
        """
        Create StyleSnapshot from dict.

        Raises:
            SnapshotDecodeError: If any record is malformed
        """
        try:
            return StyleSnapshot(
                version=StyleVersion.parse(data.get("version", str(FIRST_VERSION))),
                color_styles=[decode_color_style(d) for d in data.get("colorStyles", [])],
                text_styles=[decode_text_style(d) for d in data.get("textStyles", [])],
                timestamp=data.get("timestamp"),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotDecodeError(f"Malformed style snapshot: {e}") from e


def read_snapshot(path: Path) -> StyleSnapshot:
    """
    Read a snapshot file.

    Args:
        path: Snapshot JSON file

    Returns:
        Decoded StyleSnapshot

    Raises:
        SnapshotDecodeError: If the file cannot be read or decoded
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotDecodeError(f"Failed to read style snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotDecodeError(f"Style snapshot {path} is not a JSON object")
    return StyleSnapshot.from_dict(data)


def load_snapshot(path: Path) -> tuple[StyleSnapshot, list[Diagnostic]]:
    """
    Load the previously exported styles.

    A missing file means this is the first export. An unreadable file is
    treated the same way (every current style appears new) and reported.

    Args:
        path: Snapshot JSON file

    Returns:
        Tuple of (snapshot, diagnostics)
    """
    if not path.exists():
        return StyleSnapshot(), []

    try:
        return read_snapshot(path), []
    except SnapshotDecodeError as e:
        logger.warning("Ignoring unreadable style snapshot: %s", e.message)
        diagnostic = Diagnostic(
            kind=DiagnosticKind.SNAPSHOT_DECODE_FAILURE,
            message=f"{e.message}; treating all styles as new",
            source=str(path),
        )
        return StyleSnapshot(), [diagnostic]


def save_snapshot(path: Path, snapshot: StyleSnapshot) -> None:
    """
    Write a snapshot after a successful export.

    The timestamp is set to the current time when the snapshot has none.

    Raises:
        ExportError: If the snapshot cannot be written
    """
    if snapshot.timestamp is None:
        snapshot.timestamp = datetime.now(UTC).isoformat()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ExportError(f"Failed to save style snapshot {path}: {e}") from e


def clear_snapshot(path: Path) -> None:
    """Delete the snapshot (the next export starts from scratch)."""
    if path.exists():
        path.unlink()


__all__ = [
    "DEFAULT_SNAPSHOT_PATH",
    "StyleSnapshot",
    "encode_color_style",
    "decode_color_style",
    "encode_text_style",
    "decode_text_style",
    "read_snapshot",
    "load_snapshot",
    "save_snapshot",
    "clear_snapshot",
]
