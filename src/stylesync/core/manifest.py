"""
Project configuration loaded from stylesync.toml.

All relative paths in the file are resolved against the directory that
contains it.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .state import DEFAULT_SNAPSHOT_PATH

MANIFEST_FILE = "stylesync.toml"


@dataclass
class TemplatesConfig:
    """Code templates, one per style variant plus an optional changelog."""

    colors: Path | None = None
    text: Path | None = None
    changelog: Path | None = None


@dataclass
class OutputConfig:
    """Where generated files are written. Extensions come from the templates."""

    colors_dir: Path = Path(".")
    text_dir: Path = Path(".")
    colors_name: str = "ColorStyles"
    text_name: str = "TextStyles"
    changelog: Path | None = None  # Without extension


@dataclass
class ScanConfig:
    """Project files searched for references to deprecated or renamed styles."""

    paths: list[Path] = field(default_factory=list)
    extensions: list[str] = field(default_factory=list)
    exclude_generated: bool = True
    prune_unused_deprecated: bool = False


@dataclass
class ProjectManifest:
    """Complete stylesync configuration."""

    root: Path
    name: str = ""
    styles_input: Path | None = None
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    snapshot_path: Path = DEFAULT_SNAPSHOT_PATH
    scan: ScanConfig = field(default_factory=ScanConfig)


def _optional_path(root: Path, value: str | None) -> Path | None:
    if not value:
        return None
    return (root / value).resolve()


def _normalise_extension(extension: str) -> str:
    return extension if extension.startswith(".") else f".{extension}"


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load stylesync.toml.

    Args:
        path: Path to the manifest file

    Returns:
        ProjectManifest with absolute paths

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"No {MANIFEST_FILE} found at {path}") from e
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    root = path.parent.resolve()

    project = data.get("project", {})
    styles_data = data.get("styles", {})
    templates_data = data.get("templates", {})
    output_data = data.get("output", {})
    snapshot_data = data.get("snapshot", {})
    scan_data = data.get("scan", {})

    try:
        templates = TemplatesConfig(
            colors=_optional_path(root, templates_data.get("colors")),
            text=_optional_path(root, templates_data.get("text")),
            changelog=_optional_path(root, templates_data.get("changelog")),
        )

        output = OutputConfig(
            colors_dir=(root / output_data.get("colors_dir", ".")).resolve(),
            text_dir=(root / output_data.get("text_dir", ".")).resolve(),
            colors_name=output_data.get("colors_name", "ColorStyles"),
            text_name=output_data.get("text_name", "TextStyles"),
            changelog=_optional_path(root, output_data.get("changelog")),
        )

        scan = ScanConfig(
            paths=[(root / p).resolve() for p in scan_data.get("paths", [])],
            extensions=[_normalise_extension(e) for e in scan_data.get("extensions", [])],
            exclude_generated=bool(scan_data.get("exclude_generated", True)),
            prune_unused_deprecated=bool(scan_data.get("prune_unused_deprecated", False)),
        )

        snapshot_path = (root / snapshot_data.get("path", str(DEFAULT_SNAPSHOT_PATH))).resolve()
    except (TypeError, AttributeError) as e:
        raise ConfigError(f"Invalid value in {path}: {e}") from e

    if templates.changelog and not output.changelog:
        raise ConfigError(
            f"{path}: [templates] changelog is set but [output] changelog is not"
        )

    return ProjectManifest(
        root=root,
        name=project.get("name", root.name),
        styles_input=_optional_path(root, styles_data.get("input")),
        templates=templates,
        output=output,
        snapshot_path=snapshot_path,
        scan=scan,
    )


__all__ = [
    "MANIFEST_FILE",
    "TemplatesConfig",
    "OutputConfig",
    "ScanConfig",
    "ProjectManifest",
    "load_manifest",
]
