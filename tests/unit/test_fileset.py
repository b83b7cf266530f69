"""
Unit tests for project file discovery.
"""

from pathlib import Path

import pytest

from stylesync.core.fileset import discover_project_files
from stylesync.core.manifest import OutputConfig, ProjectManifest, ScanConfig, TemplatesConfig


@pytest.fixture
def project(tmp_path: Path) -> Path:
    sources = tmp_path / "Sources"
    (sources / "Generated").mkdir(parents=True)
    (sources / "Views").mkdir()
    (sources / "App.swift").write_text("let color = UIColor.brand")
    (sources / "Views" / "Card.swift").write_text("let text = TextStyle.body")
    (sources / "notes.txt").write_text("brand")
    (sources / "Generated" / "ColorStyles.swift").write_text("static let brand")
    (tmp_path / "Package.swift").write_text("// root")
    return tmp_path


def _manifest(root: Path, **scan) -> ProjectManifest:
    generated = root / "Sources" / "Generated"
    return ProjectManifest(
        root=root,
        output=OutputConfig(colors_dir=generated, text_dir=generated),
        scan=ScanConfig(**scan),
    )


class TestDiscoverProjectFiles:
    def test_filters_by_extension_and_excludes_generated(self, project: Path) -> None:
        manifest = _manifest(project, paths=[project / "Sources"], extensions=[".swift"])

        files = discover_project_files(project, manifest)

        assert [f.name for f in files] == ["App.swift", "Card.swift"]

    def test_generated_files_included_when_requested(self, project: Path) -> None:
        manifest = _manifest(
            project, paths=[project / "Sources"], extensions=[".swift"], exclude_generated=False
        )

        names = [f.name for f in discover_project_files(project, manifest)]

        assert "ColorStyles.swift" in names

    def test_defaults_to_root_and_all_extensions(self, project: Path) -> None:
        names = {f.name for f in discover_project_files(project, _manifest(project))}

        assert names == {"App.swift", "Card.swift", "notes.txt", "Package.swift"}

    def test_overlapping_paths_are_deduplicated(self, project: Path) -> None:
        manifest = _manifest(
            project, paths=[project / "Sources", project / "Sources" / "Views"], extensions=[".swift"]
        )

        files = discover_project_files(project, manifest)

        assert len(files) == len(set(files)) == 2

    def test_missing_scan_path_is_ignored(self, project: Path) -> None:
        manifest = _manifest(project, paths=[project / "Missing"])

        assert discover_project_files(project, manifest) == []

    def test_hidden_directories_are_skipped(self, project: Path) -> None:
        (project / ".git" / "objects").mkdir(parents=True)
        (project / ".git" / "objects" / "ab12").write_bytes(b"\x78\x9c brand")
        (project / "Sources" / ".build").mkdir()
        (project / "Sources" / ".build" / "Cache.swift").write_text("brand")

        names = {f.name for f in discover_project_files(project, _manifest(project))}

        assert names == {"App.swift", "Card.swift", "notes.txt", "Package.swift"}

    def test_stylesync_inputs_are_excluded(self, project: Path) -> None:
        templates = project / "templates"
        templates.mkdir()
        for name in ("ColorStyles.swift.template", "TextStyles.swift.template", "Changelog.md.template"):
            (templates / name).write_text("<#=red#>")
        (project / "design").mkdir()
        (project / "design" / "styles.json").write_text('{"colorStyles": []}')
        (project / "build").mkdir()
        (project / "build" / "styles.json").write_text("{}")
        manifest = _manifest(project)
        manifest.templates = TemplatesConfig(
            colors=templates / "ColorStyles.swift.template",
            text=templates / "TextStyles.swift.template",
            changelog=templates / "Changelog.md.template",
        )
        manifest.styles_input = project / "design" / "styles.json"
        manifest.snapshot_path = project / "build" / "styles.json"

        names = {f.name for f in discover_project_files(project, manifest)}

        assert names == {"App.swift", "Card.swift", "notes.txt", "Package.swift"}
