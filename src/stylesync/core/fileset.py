"""
Project file discovery.

Finds the files scanned for references to deprecated and renamed styles.
stylesync's own inputs (templates, style records, snapshot) and anything
under a hidden directory such as ``.git`` are never part of the set.
"""

from __future__ import annotations

from pathlib import Path

from .manifest import ProjectManifest


def generated_output_stems(manifest: ProjectManifest) -> set[Path]:
    """Resolved paths of generated outputs, without their template extension."""
    output = manifest.output
    stems = {
        output.colors_dir / output.colors_name,
        output.text_dir / output.text_name,
    }
    if output.changelog:
        stems.add(output.changelog)
    return {stem.resolve() for stem in stems}


def _stylesync_inputs(manifest: ProjectManifest) -> set[Path]:
    templates = manifest.templates
    paths = {
        templates.colors,
        templates.text,
        templates.changelog,
        manifest.styles_input,
        manifest.snapshot_path,
    }
    return {path.resolve() for path in paths if path is not None}


def _is_hidden(path: Path, base: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(base).parts)


def discover_project_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    """
    Find project files under the configured scan paths.

    Args:
        root: Project root, used when no scan paths are configured
        manifest: Project manifest

    Returns:
        Sorted, de-duplicated list of files
    """
    files: list[Path] = []
    generated = generated_output_stems(manifest) if manifest.scan.exclude_generated else set()
    excluded = _stylesync_inputs(manifest)
    for base in manifest.scan.paths or [root]:
        base = (root / base).resolve()
        if not base.exists():
            continue
        for p in base.rglob("*"):
            if not p.is_file() or _is_hidden(p, base):
                continue
            if manifest.scan.extensions and p.suffix not in manifest.scan.extensions:
                continue
            resolved = p.resolve()
            if resolved in excluded or resolved.with_suffix("") in generated:
                continue
            files.append(p)
    return sorted(set(files))


__all__ = [
    "generated_output_stems",
    "discover_project_files",
]
