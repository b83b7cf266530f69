"""
Attribute-level changes between two versions of the same style.
"""

from __future__ import annotations

from dataclasses import dataclass

from .replacable import CodeTemplateReplacable

STYLE_DECLARATION = "styleDeclaration"
VERSION_DECLARATION = "versionDeclaration"


@dataclass(frozen=True)
class UpdatedAttribute:
    """One placeholder key whose rendered value changed."""

    attribute_name: str
    old_value: str
    new_value: str

    def describe(self) -> str:
        return f"{self.attribute_name}: {self.old_value} -> {self.new_value}"


@dataclass(frozen=True)
class UpdatedStyle:
    """
    A changelog entry for a style whose rendered attributes changed.

    The two versions are matched by the caller (by identifier); this type only
    compares their replacement dictionaries. Use ``UpdatedStyle.between`` to
    build one; it returns ``None`` when nothing differs.
    """

    style_name: str
    updated_attributes: tuple[UpdatedAttribute, ...]

    @classmethod
    def between(
        cls,
        old_style: CodeTemplateReplacable,
        new_style: CodeTemplateReplacable,
        style_name: str | None = None,
    ) -> UpdatedStyle | None:
        """
        Compare two representations of the same style.

        Args:
            old_style: Previously exported version
            new_style: Latest version
            style_name: Display name for the entry; defaults to the new
                style's ``name`` replacement value

        Returns:
            UpdatedStyle listing the differing attributes in the old
            dictionary's key order, or None if no attribute differs
        """
        old_values = old_style.replacement_dictionary
        new_values = new_style.replacement_dictionary
        ignored = new_style.ignored_update_attributes

        updated_attributes = tuple(
            UpdatedAttribute(attribute_name=key, old_value=old_value, new_value=new_values[key])
            for key, old_value in old_values.items()
            if key in new_values and new_values[key] != old_value and key not in ignored
        )
        if not updated_attributes:
            return None

        if style_name is None:
            style_name = new_values.get("name", "")
        return cls(style_name=style_name, updated_attributes=updated_attributes)

    @property
    def declaration_name(self) -> str:
        return STYLE_DECLARATION

    @property
    def replacement_dictionary(self) -> dict[str, str]:
        return {
            "styleName": self.style_name,
            "updatedAttributes": ", ".join(a.describe() for a in self.updated_attributes),
            "attributeCount": str(len(self.updated_attributes)),
        }

    @property
    def ignored_update_attributes(self) -> frozenset[str]:
        return frozenset()

    @property
    def is_deprecated(self) -> bool:
        return False


@dataclass(frozen=True)
class VersionHeader:
    """The heading line of a changelog: which version the entries lead to."""

    version: str
    previous_version: str

    @property
    def declaration_name(self) -> str:
        return VERSION_DECLARATION

    @property
    def replacement_dictionary(self) -> dict[str, str]:
        return {"version": self.version, "previousVersion": self.previous_version}

    @property
    def ignored_update_attributes(self) -> frozenset[str]:
        return frozenset()

    @property
    def is_deprecated(self) -> bool:
        return False


__all__ = [
    "STYLE_DECLARATION",
    "VERSION_DECLARATION",
    "VersionHeader",
    "UpdatedAttribute",
    "UpdatedStyle",
]
