"""
Template-based code generation.

Expands ``<declaration>`` blocks and ``<#...#>`` placeholders in a code
template against groups of styles or changelog entries.
"""

from .generator import (
    GENERATED_FILE_HEADER,
    CodeGenerator,
    GenerationResult,
    conditional_reference,
    declaration_end_reference,
    declaration_start_reference,
    metadata_reference,
    placeholder_reference,
    render_file,
)

__all__ = [
    "GENERATED_FILE_HEADER",
    "CodeGenerator",
    "GenerationResult",
    "render_file",
    "placeholder_reference",
    "conditional_reference",
    "metadata_reference",
    "declaration_start_reference",
    "declaration_end_reference",
]
