"""
Style export orchestration.

Combines the latest styles with the previous snapshot:
- Styles that disappeared upstream are carried forward as deprecated so code
  that references them keeps compiling with a warning.
- Renamed styles are detected by identifier and their old code names are
  rewritten in the project.
- Attribute changes become changelog entries.
- Project files referencing deprecated styles are reported so the consumer
  knows where migration work remains.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from .codegen import CodeGenerator, GenerationResult
from .core.changes import S, StyleChangeSet, StyleParser, detect_style_changes
from .core.errors import Diagnostic, DiagnosticKind, ExportError
from .core.ir import ColorStyle, TextStyle, UpdatedStyle, VersionHeader
from .core.manifest import ProjectManifest
from .core.state import StyleSnapshot, save_snapshot
from .core.versioning import FIRST_VERSION, StyleVersion, next_version

logger = logging.getLogger(__name__)

_MAX_SCAN_WORKERS = 8


@dataclass
class ExportDestinations:
    """Templates to render and where the results go."""

    colors_template: Path | None
    text_template: Path | None
    colors_dir: Path
    text_dir: Path
    snapshot_path: Path
    colors_name: str = "ColorStyles"
    text_name: str = "TextStyles"
    changelog_template: Path | None = None
    changelog_path: Path | None = None  # Without extension

    @classmethod
    def from_manifest(cls, manifest: ProjectManifest) -> ExportDestinations:
        return cls(
            colors_template=manifest.templates.colors,
            text_template=manifest.templates.text,
            colors_dir=manifest.output.colors_dir,
            text_dir=manifest.output.text_dir,
            snapshot_path=manifest.snapshot_path,
            colors_name=manifest.output.colors_name,
            text_name=manifest.output.text_name,
            changelog_template=manifest.templates.changelog,
            changelog_path=manifest.output.changelog,
        )

    def protected_paths(self) -> list[Path]:
        """
        Files a reference update must never touch.

        Generated outputs are given without extension since it comes from the
        template.
        """
        paths = [
            self.colors_dir / self.colors_name,
            self.text_dir / self.text_name,
            self.snapshot_path,
        ]
        paths.extend(
            path
            for path in (self.colors_template, self.text_template, self.changelog_template, self.changelog_path)
            if path is not None
        )
        return paths


@dataclass
class PlannedFile:
    """A generated file that has not been written yet."""

    directory: Path
    name: str
    result: GenerationResult

    @property
    def path(self) -> Path:
        return self.directory / self.result.file_name(self.name)


@dataclass
class ExportResult:
    """
    Result of an export run.

    Attributes:
        files_created: Generated files written (snapshot excluded)
        updated_reference_files: Project files rewritten for renamed styles
        warnings: Non-fatal problems (unresolved placeholders, references to
            deprecated styles, ...)
        version: Version of the exported style set
        change_set: What changed compared to the previous export
    """

    version: StyleVersion
    change_set: StyleChangeSet
    files_created: list[Path] = field(default_factory=list)
    updated_reference_files: list[Path] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    def add_file(self, path: Path) -> None:
        self.files_created.append(path)

    def add_warning(self, warning: Diagnostic) -> None:
        self.warnings.append(warning)


class StyleExporter:
    """
    Computes the styles to emit and renders them.

    All derived values are computed once on construction; nothing is written
    until ``export_styles`` is called.

    Example:
        exporter = StyleExporter(
            latest_color_styles=loaded.color_styles,
            latest_text_styles=loaded.text_styles,
            previous_color_styles=snapshot.color_styles,
            previous_text_styles=snapshot.text_styles,
            project_files=discover_project_files(root, manifest),
            previous_version=snapshot.version,
        )
        result = exporter.export_styles(ExportDestinations.from_manifest(manifest))
    """

    def __init__(
        self,
        latest_color_styles: Sequence[ColorStyle],
        latest_text_styles: Sequence[TextStyle],
        previous_color_styles: Sequence[ColorStyle],
        previous_text_styles: Sequence[TextStyle],
        project_files: Iterable[Path] = (),
        previous_version: StyleVersion = FIRST_VERSION,
        prune_unused_deprecated: bool = False,
    ):
        self.latest_color_styles = list(latest_color_styles)
        self.latest_text_styles = list(latest_text_styles)
        self.previous_color_styles = list(previous_color_styles)
        self.previous_text_styles = list(previous_text_styles)
        self.project_files = sorted(set(project_files))
        self.previous_version = previous_version
        self.prune_unused_deprecated = prune_unused_deprecated

        color_parser = StyleParser(self.latest_color_styles)
        text_parser = StyleParser(self.latest_text_styles)

        self.deprecated_color_styles = color_parser.deprecated_styles(self.previous_color_styles)
        self.deprecated_text_styles = text_parser.deprecated_styles(self.previous_text_styles)
        self.migrated_color_styles = color_parser.migrated_pairs(self.previous_color_styles)
        self.migrated_text_styles = text_parser.migrated_pairs(self.previous_text_styles)

        self.changelog: list[UpdatedStyle] = [
            *color_parser.updated_styles(self.previous_color_styles),
            *text_parser.updated_styles(self.previous_text_styles),
        ]

        self._project_texts = _read_project_files(self.project_files)
        self.file_names_for_deprecated_style_names = self._find_deprecated_style_references()

        self.new_color_styles: list[ColorStyle] = self.latest_color_styles + self._carried_forward(
            self.deprecated_color_styles
        )
        self.new_text_styles: list[TextStyle] = self.latest_text_styles + self._carried_forward(
            self.deprecated_text_styles
        )

        self.change_set = detect_style_changes(
            self.latest_color_styles,
            self.latest_text_styles,
            self.previous_color_styles,
            self.previous_text_styles,
        )
        if self.previous_color_styles or self.previous_text_styles:
            self.new_version = next_version(previous_version, self.change_set)
        else:
            # First export
            self.new_version = previous_version

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    def _carried_forward(self, deprecated_styles: list[S]) -> list[S]:
        if not self.prune_unused_deprecated:
            return list(deprecated_styles)
        kept = [s for s in deprecated_styles if s.name in self.file_names_for_deprecated_style_names]
        for style in deprecated_styles:
            if style not in kept:
                logger.info("Dropping unused deprecated style '%s'", style.name)
        return kept

    def _find_deprecated_style_references(self) -> dict[str, list[str]]:
        """Map each deprecated style name to the project files using its code name."""
        references: dict[str, set[str]] = {}
        for style in [*self.deprecated_color_styles, *self.deprecated_text_styles]:
            code_name = style.code_name
            if not code_name:
                continue
            for path, text in self._project_texts.items():
                if code_name in text:
                    references.setdefault(style.name, set()).add(path.name)
        return {name: sorted(file_names) for name, file_names in references.items()}

    @property
    def deprecated_reference_warnings(self) -> list[Diagnostic]:
        return [
            Diagnostic(
                kind=DiagnosticKind.DEPRECATED_REFERENCE,
                message=f"'{name}' is deprecated but still referenced in {', '.join(file_names)}",
                source=name,
            )
            for name, file_names in sorted(self.file_names_for_deprecated_style_names.items())
        ]

    # -------------------------------------------------------------------------
    # Project references
    # -------------------------------------------------------------------------

    def update_references_to_migrated_styles(self, protected: Iterable[Path] = ()) -> list[Path]:
        """
        Rewrite old code names of renamed styles to their new code names.

        Only whole identifiers are replaced, so renaming ``brand`` does not
        touch ``brandBlue``. Each file is read again right before it is
        rewritten; a file that is not valid UTF-8 is left alone.

        Args:
            protected: Files that are never rewritten. A path without an
                extension protects every file with that stem (generated
                outputs take their extension from the template).

        Returns:
            Project files that were modified

        Raises:
            ExportError: If a modified file cannot be written
        """
        renames = {
            old.code_name: new.code_name
            for old, new in [*self.migrated_color_styles, *self.migrated_text_styles]
            if old.code_name and old.code_name != new.code_name
        }
        if not renames:
            return []

        pattern = re.compile(
            r"(?<![A-Za-z0-9_])("
            + "|".join(re.escape(name) for name in sorted(renames, key=len, reverse=True))
            + r")(?![A-Za-z0-9_])"
        )
        protected_paths = {path.resolve() for path in protected}

        updated: list[Path] = []
        for path in self._project_texts:
            resolved = path.resolve()
            if resolved in protected_paths or resolved.with_suffix("") in protected_paths:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Not updating references in %s: %s", path, e)
                continue

            new_text = pattern.sub(lambda match: renames[match.group(1)], text)
            if new_text == text:
                continue
            try:
                path.write_text(new_text, encoding="utf-8")
            except OSError as e:
                raise ExportError(f"Failed to update references in {path}: {e}") from e
            self._project_texts[path] = new_text
            updated.append(path)
            logger.info("Updated renamed style references in %s", path)
        return updated

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_files(self, destinations: ExportDestinations) -> list[PlannedFile]:
        """
        Render every configured template without writing anything.

        All templates are loaded first, so a template without a file
        extension aborts before any output is produced.

        Raises:
            MissingFileExtensionError: If a template lacks its extension line
        """
        colors_generator = (
            CodeGenerator.from_file(destinations.colors_template)
            if destinations.colors_template
            else None
        )
        text_generator = (
            CodeGenerator.from_file(destinations.text_template)
            if destinations.text_template
            else None
        )
        changelog_generator = (
            CodeGenerator.from_file(destinations.changelog_template)
            if destinations.changelog_template and destinations.changelog_path
            else None
        )

        planned: list[PlannedFile] = []

        if colors_generator and self.new_color_styles:
            planned.append(
                PlannedFile(
                    directory=destinations.colors_dir,
                    name=destinations.colors_name,
                    result=colors_generator.generate([self.new_color_styles]),
                )
            )
        elif colors_generator:
            logger.info("No color styles to export")

        if text_generator and self.new_text_styles:
            planned.append(
                PlannedFile(
                    directory=destinations.text_dir,
                    name=destinations.text_name,
                    result=text_generator.generate([self.new_text_styles]),
                )
            )
        elif text_generator:
            logger.info("No text styles to export")

        if changelog_generator and destinations.changelog_path and self.changelog:
            header = VersionHeader(version=str(self.new_version), previous_version=str(self.previous_version))
            planned.append(
                PlannedFile(
                    directory=destinations.changelog_path.parent,
                    name=destinations.changelog_path.name,
                    result=changelog_generator.generate([[header], self.changelog]),
                )
            )

        return planned

    def export_styles(
        self,
        destinations: ExportDestinations,
        update_references: bool = True,
    ) -> ExportResult:
        """
        Generate code, update renamed references and persist the snapshot.

        Args:
            destinations: Templates and output locations
            update_references: Rewrite project references to renamed styles

        Returns:
            ExportResult with written files and warnings

        Raises:
            MissingFileExtensionError: If a template lacks its extension line
            ExportError: If output cannot be written
        """
        result = ExportResult(version=self.new_version, change_set=self.change_set)

        for planned in self.generate_files(destinations):
            for warning in planned.result.warnings:
                result.add_warning(warning)
            result.add_file(planned.result.write(planned.directory, planned.name))

        if update_references:
            result.updated_reference_files = self.update_references_to_migrated_styles(
                protected=[*destinations.protected_paths(), *result.files_created]
            )

        for warning in self.deprecated_reference_warnings:
            result.add_warning(warning)

        save_snapshot(destinations.snapshot_path, self.snapshot())
        logger.info(
            "Exported %d color styles and %d text styles (version %s)",
            len(self.new_color_styles),
            len(self.new_text_styles),
            self.new_version,
        )
        return result

    def snapshot(self) -> StyleSnapshot:
        """The snapshot the next run will diff against."""
        return StyleSnapshot(
            version=self.new_version,
            color_styles=list(self.new_color_styles),
            text_styles=list(self.new_text_styles),
        )


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Skipping unreadable project file %s: %s", path, e)
        return None


def _read_project_files(paths: list[Path]) -> dict[Path, str]:
    """Read every project file once, concurrently."""
    if not paths:
        return {}
    with ThreadPoolExecutor(max_workers=min(_MAX_SCAN_WORKERS, len(paths))) as executor:
        texts = list(executor.map(_read_text, paths))
    return {path: text for path, text in zip(paths, texts, strict=True) if text is not None}


__all__ = [
    "ExportDestinations",
    "PlannedFile",
    "ExportResult",
    "StyleExporter",
]
