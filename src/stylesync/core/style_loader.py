"""
Loader for decoded style records.

The design tool's document format is handled upstream; this module reads the
neutral JSON records that adapter produces and turns them into style values:

    {
      "colorStyles": [
        {"name": "Brand", "identifier": "C1",
         "fills": [{"red": 0.2, "green": 0.4, "blue": 0.6, "alpha": 1}]}
      ],
      "textStyles": [
        {"name": "Body", "identifier": "T1", "fontName": "Inter",
         "pointSize": 16, "kerning": 0, "lineHeight": 20,
         "color": {"red": 0, "green": 0, "blue": 0, "alpha": 1}}
      ]
    }

Rules:
- The first fill of a color style wins.
- Measurements are rounded to two decimal places.
- A record missing a required attribute is skipped with a warning; the rest
  of the run continues.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import Diagnostic, DiagnosticKind, ErrorContext, StyleParseError, StyleSyncError
from .ir import ColorStyle, TextStyle
from .strings import round_to_two_decimal_places

logger = logging.getLogger(__name__)


class StyleRecordsError(StyleSyncError):
    """The style records file itself cannot be read."""

    pass


@dataclass
class LoadedStyles:
    """Styles parsed from a records file, plus any records that were skipped."""

    color_styles: list[ColorStyle] = field(default_factory=list)
    text_styles: list[TextStyle] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)


# =============================================================================
# Record parsers
# =============================================================================


def _record_name(record: Any) -> str:
    if isinstance(record, dict):
        return str(record.get("name", "<unnamed>"))
    return "<invalid record>"


def _require(record: dict[str, Any], key: str) -> Any:
    value = record.get(key)
    if value is None:
        raise StyleParseError(_record_name(record), f"missing '{key}'")
    return value


def _color_components(name: str, color: Any) -> dict[str, float]:
    if not isinstance(color, dict):
        raise StyleParseError(name, "color is not an object")
    try:
        return {
            "red": float(color["red"]),
            "green": float(color["green"]),
            "blue": float(color["blue"]),
            "alpha": float(color.get("alpha", 1.0)),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise StyleParseError(name, f"invalid color component {e}") from e


def parse_color_record(record: dict[str, Any]) -> ColorStyle:
    """
    Build a ColorStyle from a decoded record.

    Raises:
        StyleParseError: If the record has no name, identifier or fill
    """
    if not isinstance(record, dict):
        raise StyleParseError(_record_name(record), "record is not an object")

    name = _require(record, "name")
    identifier = _require(record, "identifier")
    fills = record.get("fills") or []
    if not fills:
        raise StyleParseError(name, "no fills")

    try:
        return ColorStyle(name=name, identifier=identifier, **_color_components(name, fills[0]))
    except ValidationError as e:
        raise StyleParseError(name, str(e)) from e


def parse_text_record(record: dict[str, Any], color_styles: list[ColorStyle]) -> TextStyle:
    """
    Build a TextStyle from a decoded record.

    The text color resolves to the first named color style with the same
    components; otherwise an inline color named after the text style is used.

    Raises:
        StyleParseError: If a required attribute is missing or invalid
    """
    if not isinstance(record, dict):
        raise StyleParseError(_record_name(record), "record is not an object")

    name = _require(record, "name")
    identifier = _require(record, "identifier")
    font_name = _require(record, "fontName")
    point_size = _require(record, "pointSize")
    line_height = _require(record, "lineHeight")

    try:
        inline_color = ColorStyle(
            name=f"{name} Color",
            identifier=f"{identifier}-color",
            **_color_components(name, _require(record, "color")),
        )
        color_style = ColorStyle.matching(inline_color, color_styles) or inline_color

        return TextStyle(
            name=name,
            identifier=identifier,
            font_name=font_name,
            point_size=round_to_two_decimal_places(point_size),
            kerning=round_to_two_decimal_places(record.get("kerning") or 0),
            line_height=round_to_two_decimal_places(line_height),
            color_style=color_style,
        )
    except (ValidationError, TypeError, ValueError) as e:
        raise StyleParseError(name, str(e)) from e


# =============================================================================
# Loading
# =============================================================================


def _skipped(error: StyleParseError) -> Diagnostic:
    logger.warning("Skipping style: %s", error.message)
    return Diagnostic(
        kind=DiagnosticKind.STYLE_PARSE_FAILURE,
        message=error.message,
        source=error.style_name,
    )


def _section(data: dict[str, Any], key: str) -> list[Any]:
    records = data.get(key, [])
    if not isinstance(records, list):
        raise StyleRecordsError(f"'{key}' must be a list, got {type(records).__name__}")
    return records


def parse_style_records(data: dict[str, Any]) -> LoadedStyles:
    """
    Parse already-decoded style records.

    Args:
        data: Mapping with ``colorStyles`` and ``textStyles`` lists

    Returns:
        LoadedStyles with every record that could be parsed

    Raises:
        StyleRecordsError: If a section is present but is not a list
    """
    color_records = _section(data, "colorStyles")
    text_records = _section(data, "textStyles")
    loaded = LoadedStyles()

    for record in color_records:
        try:
            loaded.color_styles.append(parse_color_record(record))
        except StyleParseError as e:
            loaded.warnings.append(_skipped(e))

    for record in text_records:
        try:
            loaded.text_styles.append(parse_text_record(record, loaded.color_styles))
        except StyleParseError as e:
            loaded.warnings.append(_skipped(e))

    logger.debug(
        "Parsed %d color styles and %d text styles (%d skipped)",
        len(loaded.color_styles),
        len(loaded.text_styles),
        len(loaded.warnings),
    )
    return loaded


def load_style_records(path: Path) -> LoadedStyles:
    """
    Read and parse a style records JSON file.

    Raises:
        StyleRecordsError: If the file cannot be read or is not a JSON object
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StyleRecordsError(f"Invalid JSON: {e.msg}", ErrorContext(path, e.lineno)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise StyleRecordsError(f"Failed to read style records {path}: {e}") from e

    if not isinstance(data, dict):
        raise StyleRecordsError(f"Style records {path} must be a JSON object")
    return parse_style_records(data)


__all__ = [
    "StyleRecordsError",
    "LoadedStyles",
    "parse_color_record",
    "parse_text_record",
    "parse_style_records",
    "load_style_records",
]
