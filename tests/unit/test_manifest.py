"""
Unit tests for stylesync.toml loading.
"""

from pathlib import Path

import pytest

from stylesync.core.errors import ConfigError
from stylesync.core.manifest import load_manifest
from stylesync.core.state import DEFAULT_SNAPSHOT_PATH

FULL_MANIFEST = """
[project]
name = "Demo"

[styles]
input = "design/styles.json"

[templates]
colors = "templates/ColorStyles.swift.template"
text = "templates/TextStyles.swift.template"
changelog = "templates/Changelog.md.template"

[output]
colors_dir = "Sources/Generated"
text_dir = "Sources/Generated"
colors_name = "Palette"
changelog = "STYLE_CHANGELOG"

[snapshot]
path = "build/styles.json"

[scan]
paths = ["Sources"]
extensions = ["swift", ".m"]
prune_unused_deprecated = true
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "stylesync.toml"
    path.write_text(content)
    return path


class TestLoadManifest:
    def test_full_manifest(self, tmp_path: Path) -> None:
        manifest = load_manifest(_write(tmp_path, FULL_MANIFEST))
        root = tmp_path.resolve()

        assert manifest.root == root
        assert manifest.name == "Demo"
        assert manifest.styles_input == root / "design" / "styles.json"
        assert manifest.templates.colors == root / "templates" / "ColorStyles.swift.template"
        assert manifest.templates.changelog == root / "templates" / "Changelog.md.template"
        assert manifest.output.colors_dir == root / "Sources" / "Generated"
        assert manifest.output.colors_name == "Palette"
        assert manifest.output.text_name == "TextStyles"
        assert manifest.output.changelog == root / "STYLE_CHANGELOG"
        assert manifest.snapshot_path == root / "build" / "styles.json"
        assert manifest.scan.paths == [root / "Sources"]
        assert manifest.scan.extensions == [".swift", ".m"]
        assert manifest.scan.exclude_generated
        assert manifest.scan.prune_unused_deprecated

    def test_defaults(self, tmp_path: Path) -> None:
        manifest = load_manifest(_write(tmp_path, ""))

        assert manifest.name == tmp_path.resolve().name
        assert manifest.styles_input is None
        assert manifest.templates.colors is None
        assert manifest.snapshot_path == tmp_path.resolve() / DEFAULT_SNAPSHOT_PATH
        assert manifest.scan.paths == []
        assert not manifest.scan.prune_unused_deprecated

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="No stylesync.toml"):
            load_manifest(tmp_path / "stylesync.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_manifest(_write(tmp_path, "[project\nname = "))

    def test_changelog_template_requires_destination(self, tmp_path: Path) -> None:
        content = '[templates]\nchangelog = "templates/Changelog.md.template"\n'

        with pytest.raises(ConfigError, match="changelog"):
            load_manifest(_write(tmp_path, content))

    def test_invalid_value(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_manifest(_write(tmp_path, "[scan]\npaths = [1, 2]\n"))
