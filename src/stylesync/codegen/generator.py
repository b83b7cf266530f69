"""
Placeholder-based code generation from templates.

A template is plain text in the target language with a few markers:

    <#@fileExtension#>swift            metadata: extension of the output file
    <colorDeclaration>                 start of a repeatable block
        static let <#=colorName#> = ...    inline placeholder
        @available(*, deprecated) <#?deprecated=true#>   conditional line
    </colorDeclaration>                end of the block

Each block is replaced by one copy of its body per item in the group whose
declaration name matches. A line holding a conditional marker survives only
when the item's value for that key matches; the marker itself is removed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import (
    Diagnostic,
    DiagnosticKind,
    ExportError,
    GenerationError,
    MissingFileExtensionError,
)
from ..core.ir import CodeTemplateReplacable, HeaderLine

logger = logging.getLogger(__name__)

FILE_EXTENSION_KEY = "fileExtension"
DEPRECATED_KEY = "deprecated"

GENERATED_FILE_HEADER = (
    "Automatically generated by stylesync",
    "Do not edit this file by hand",
)

_REFERENCE_START = "<#"
_REFERENCE_END = "#>"
_UNRESOLVED_MARKER = "<#="
_CONDITIONAL_PATTERN = re.compile(r"<#\?([^=#]+)=(.*?)#>")


# =============================================================================
# Marker helpers
# =============================================================================


def placeholder_reference(key: str) -> str:
    """``<#=key#>``"""
    return f"{_REFERENCE_START}={key}{_REFERENCE_END}"


def conditional_reference(key: str, value: str) -> str:
    """``<#?key=value#>``"""
    return f"{_REFERENCE_START}?{key}={value}{_REFERENCE_END}"


def metadata_reference(key: str) -> str:
    """``<#@key#>``"""
    return f"{_REFERENCE_START}@{key}{_REFERENCE_END}"


def declaration_start_reference(declaration_name: str) -> str:
    return f"<{declaration_name}>"


def declaration_end_reference(declaration_name: str) -> str:
    return f"</{declaration_name}>"


# =============================================================================
# Result
# =============================================================================


@dataclass
class GenerationResult:
    """
    Generated code and any non-fatal problems found while producing it.

    Attributes:
        code: The generated source text
        file_extension: Extension declared by the template (without a dot)
        warnings: Diagnostics such as unresolved placeholders
    """

    code: str
    file_extension: str
    warnings: list[Diagnostic] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def file_name(self, name: str) -> str:
        return f"{name}.{self.file_extension}" if self.file_extension else name

    def write(self, destination_dir: Path, name: str) -> Path:
        """
        Write the code to ``destination_dir/name.<extension>``.

        Raises:
            ExportError: If the file cannot be written
        """
        path = destination_dir / self.file_name(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.code, encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Failed to write {path}: {e}") from e
        return path


# =============================================================================
# Generator
# =============================================================================


class CodeGenerator:
    """
    Expands a template against ordered groups of replacable items.

    Example:
        generator = CodeGenerator(template)
        result = generator.generate([color_styles])
        result.write(output_dir, "ColorStyles")
    """

    def __init__(self, template: str, source: Path | str | None = None):
        """
        Args:
            template: Template text
            source: Where the template came from, for error messages

        Raises:
            MissingFileExtensionError: If the template has no
                ``<#@fileExtension#>`` line
        """
        self.template = template
        self.source = source
        self.file_extension, self.template_lines = _extract_file_extension(
            tuple(template.split("\n")), source
        )

    @classmethod
    def from_file(cls, path: Path) -> CodeGenerator:
        """Create a generator from a UTF-8 template file."""
        return cls(path.read_text(encoding="utf-8"), source=path)

    def generate(
        self, groups: Sequence[Sequence[CodeTemplateReplacable]]
    ) -> GenerationResult:
        """
        Generate code for ``groups``.

        A group of header lines is always expanded first, so a template with a
        ``<generatedFileHeader>`` block gets a provenance header.

        Args:
            groups: Ordered groups of items. Each group must be non-empty and
                all its items must share one declaration name.

        Returns:
            GenerationResult with the code and any warnings

        Raises:
            GenerationError: If a group is empty or mixes declaration names
        """
        header_lines: list[CodeTemplateReplacable] = [HeaderLine(line) for line in GENERATED_FILE_HEADER]
        warnings: list[Diagnostic] = []

        code_lines = list(self.template_lines)
        for group in [header_lines, *groups]:
            code_lines = _replace_declarations(code_lines, group, warnings, self.source)

        warnings.extend(_validate_code_lines(code_lines, self.source))
        return GenerationResult(
            code="\n".join(code_lines),
            file_extension=self.file_extension,
            warnings=warnings,
        )


# =============================================================================
# Helpers
# =============================================================================


def _extract_file_extension(
    lines: tuple[str, ...], source: Path | str | None
) -> tuple[str, tuple[str, ...]]:
    """Find the file extension line and return it with the remaining lines."""
    reference = metadata_reference(FILE_EXTENSION_KEY)
    for index, line in enumerate(lines):
        if reference in line:
            file_extension = line.replace(reference, "").strip().lstrip(".")
            return file_extension, lines[:index] + lines[index + 1 :]
    raise MissingFileExtensionError(source)


def _find_line(lines: list[str], reference: str, start: int) -> int | None:
    for index in range(start, len(lines)):
        if reference in lines[index]:
            return index
    return None


def _condition_keys(template_lines: list[str]) -> list[str]:
    """Keys used by conditional markers in a block, in first-seen order."""
    keys: list[str] = []
    for line in template_lines:
        for match in _CONDITIONAL_PATTERN.finditer(line):
            if match.group(1) not in keys:
                keys.append(match.group(1))
    return keys


def _condition_value(item: CodeTemplateReplacable, key: str) -> str | None:
    if key == DEPRECATED_KEY:
        return "true" if item.is_deprecated else "false"
    return item.replacement_dictionary.get(key)


def _render_item(
    template_lines: list[str],
    condition_keys: list[str],
    item: CodeTemplateReplacable,
) -> list[str]:
    """
    Render one copy of a block body for ``item``.

    Conditions are evaluated against the template line, not the substituted
    one, so a style whose name contains a condition key is not dropped.
    """
    replacements = item.replacement_dictionary
    conditions = {key: _condition_value(item, key) for key in condition_keys}

    rendered: list[str] = []
    for template_line in template_lines:
        line = template_line
        keep = True
        for key, value in conditions.items():
            marker = conditional_reference(key, value) if value is not None else None
            if marker is not None and marker in line:
                # Condition matched: keep the line without the marker
                line = line.replace(marker, "")
            elif key in template_line:
                # Mentions the key without matching the condition
                keep = False
                break
        if not keep:
            continue

        for key, value in replacements.items():
            line = line.replace(placeholder_reference(key), value)
        rendered.append(line)
    return rendered


def _replace_declarations(
    code_lines: list[str],
    items: Sequence[CodeTemplateReplacable],
    warnings: list[Diagnostic],
    source: Path | str | None,
) -> list[str]:
    """
    Replace every block for the group's declaration name.

    Blocks are found one at a time, first start marker then the first end
    marker after it, and spliced into a new buffer. The search resumes after
    the spliced lines, so a later block with the same name (for example a
    second "migrated" section) is expanded too.
    """
    if not items:
        raise GenerationError("Cannot generate code for an empty group of items")

    declaration_name = items[0].declaration_name
    mismatched = sorted({i.declaration_name for i in items if i.declaration_name != declaration_name})
    if mismatched:
        raise GenerationError(
            f"Group for '{declaration_name}' also contains items for: {', '.join(mismatched)}"
        )

    start_reference = declaration_start_reference(declaration_name)
    end_reference = declaration_end_reference(declaration_name)

    buffer = list(code_lines)
    cursor = 0
    while True:
        start = _find_line(buffer, start_reference, cursor)
        if start is None:
            break
        end = _find_line(buffer, end_reference, start + 1)
        if end is None:
            message = f"Declaration {start_reference} has no matching {end_reference}"
            logger.warning("%s (line %d)", message, start)
            warnings.append(
                Diagnostic(
                    kind=DiagnosticKind.UNTERMINATED_DECLARATION,
                    message=message,
                    line=start,
                    source=str(source) if source else None,
                )
            )
            break

        item_template = buffer[start + 1 : end]
        condition_keys = _condition_keys(item_template)
        replacement: list[str] = []
        for item in items:
            replacement.extend(_render_item(item_template, condition_keys, item))

        buffer = buffer[:start] + replacement + buffer[end + 1 :]
        cursor = start + len(replacement)

    return buffer


def _validate_code_lines(code_lines: list[str], source: Path | str | None) -> list[Diagnostic]:
    """Report lines that still contain an inline placeholder."""
    diagnostics: list[Diagnostic] = []
    for offset, line in enumerate(code_lines):
        if _UNRESOLVED_MARKER in line:
            logger.warning("Unreplaced placeholder at line %d: %s", offset, line)
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNRESOLVED_PLACEHOLDER,
                    message=f"Unreplaced placeholder: {line.strip()}",
                    line=offset,
                    source=str(source) if source else None,
                )
            )
    return diagnostics


def render_file(
    template: str,
    groups: Sequence[Sequence[CodeTemplateReplacable]],
    destination_dir: Path,
    name: str,
) -> tuple[Path, GenerationResult]:
    """
    Generate code from ``template`` and write it to ``destination_dir``.

    Returns:
        Tuple of (written path, generation result)

    Raises:
        MissingFileExtensionError: If the template has no extension line
        ExportError: If the file cannot be written
    """
    result = CodeGenerator(template).generate(groups)
    return result.write(destination_dir, name), result


__all__ = [
    "FILE_EXTENSION_KEY",
    "DEPRECATED_KEY",
    "GENERATED_FILE_HEADER",
    "GenerationResult",
    "CodeGenerator",
    "render_file",
    "placeholder_reference",
    "conditional_reference",
    "metadata_reference",
    "declaration_start_reference",
    "declaration_end_reference",
]
