"""
Change detection between export runs.

Compares the styles parsed from the design file against the styles written by
the previous export to determine which styles were added, which disappeared
(and must be carried forward as deprecated), which were renamed, and which
changed attributes.

Colors and text styles are diffed separately; a ``StyleParser`` only ever
holds one variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .ir import ColorStyle, TextStyle, UpdatedStyle

S = TypeVar("S", ColorStyle, TextStyle)


class StyleParser(Generic[S]):
    """
    Diffs the current styles of one variant against a previous export.

    Example:
        parser = StyleParser(latest_colors)
        deprecated = parser.deprecated_styles(previous_colors)
        renamed = parser.migrated_pairs(previous_colors)
    """

    def __init__(self, new_styles: list[S]):
        self.new_styles = list(new_styles)
        self._by_identifier: dict[str, S] = {}
        for style in self.new_styles:
            # First occurrence wins for duplicate identifiers
            self._by_identifier.setdefault(style.identifier, style)

    def current_style(self, identifier: str) -> S | None:
        """The current style with the given identifier, if any."""
        return self._by_identifier.get(identifier)

    def deprecated_styles(self, previously_exported_styles: list[S]) -> list[S]:
        """
        Previously exported styles that no longer exist upstream.

        Returns:
            Each missing style marked deprecated, in the order of
            ``previously_exported_styles``
        """
        return [
            style.deprecated
            for style in previously_exported_styles
            if style.identifier not in self._by_identifier
        ]

    def newly_deprecated_styles(self, previously_exported_styles: list[S]) -> list[S]:
        """Like ``deprecated_styles`` but skips styles already deprecated last run."""
        return [
            style.deprecated
            for style in previously_exported_styles
            if not style.is_deprecated and style.identifier not in self._by_identifier
        ]

    def migrated_pairs(self, previously_exported_styles: list[S]) -> list[tuple[S, S]]:
        """
        Renamed styles: same identifier, different name.

        Returns:
            ``(old_style, new_style)`` pairs in the order of
            ``previously_exported_styles``
        """
        pairs: list[tuple[S, S]] = []
        for style in previously_exported_styles:
            current = self._by_identifier.get(style.identifier)
            if current is not None and current.name != style.name:
                pairs.append((style, current))
        return pairs

    def added_styles(self, previously_exported_styles: list[S]) -> list[S]:
        """Current styles whose identifier was not exported before."""
        previous_identifiers = {style.identifier for style in previously_exported_styles}
        return [style for style in self.new_styles if style.identifier not in previous_identifiers]

    def updated_styles(self, previously_exported_styles: list[S]) -> list[UpdatedStyle]:
        """
        Attribute-level changes for every style present in both sets.

        Renamed styles are included since they share an identifier; unchanged
        styles produce no entry.
        """
        updates: list[UpdatedStyle] = []
        for style in previously_exported_styles:
            current = self._by_identifier.get(style.identifier)
            if current is None:
                continue
            update = UpdatedStyle.between(style, current)
            if update is not None:
                updates.append(update)
        return updates


@dataclass
class StyleChangeSet:
    """
    Describes what changed between two exports.

    Names (not identifiers) are recorded since they are what users see.
    """

    colors_added: list[str] = field(default_factory=list)
    colors_deprecated: list[str] = field(default_factory=list)
    colors_renamed: list[tuple[str, str]] = field(default_factory=list)
    colors_updated: list[str] = field(default_factory=list)

    text_styles_added: list[str] = field(default_factory=list)
    text_styles_deprecated: list[str] = field(default_factory=list)
    text_styles_renamed: list[tuple[str, str]] = field(default_factory=list)
    text_styles_updated: list[str] = field(default_factory=list)

    @property
    def has_breaking_changes(self) -> bool:
        """Deprecations and renames break code that references the old names."""
        return bool(
            self.colors_deprecated
            or self.colors_renamed
            or self.text_styles_deprecated
            or self.text_styles_renamed
        )

    @property
    def has_additive_changes(self) -> bool:
        return bool(
            self.colors_added
            or self.colors_updated
            or self.text_styles_added
            or self.text_styles_updated
        )

    def is_empty(self) -> bool:
        """Check if there are no changes."""
        return not self.has_breaking_changes and not self.has_additive_changes

    def summary(self) -> str:
        """Generate human-readable summary of changes."""
        lines = []

        for label, added, deprecated, renamed, updated in (
            ("Colors", self.colors_added, self.colors_deprecated, self.colors_renamed, self.colors_updated),
            (
                "Text styles",
                self.text_styles_added,
                self.text_styles_deprecated,
                self.text_styles_renamed,
                self.text_styles_updated,
            ),
        ):
            if added:
                lines.append(f"  {label}: +{len(added)} ({', '.join(added)})")
            if deprecated:
                lines.append(f"  {label}: -{len(deprecated)} deprecated ({', '.join(deprecated)})")
            if renamed:
                renames = ", ".join(f"{old} -> {new}" for old, new in renamed)
                lines.append(f"  {label}: ~{len(renamed)} renamed ({renames})")
            if updated:
                lines.append(f"  {label}: ~{len(updated)} updated ({', '.join(updated)})")

        return "\n".join(lines) if lines else "  No changes detected"


def detect_style_changes(
    latest_color_styles: list[ColorStyle],
    latest_text_styles: list[TextStyle],
    previous_color_styles: list[ColorStyle],
    previous_text_styles: list[TextStyle],
) -> StyleChangeSet:
    """
    Detect changes between the previous export and the latest styles.

    Args:
        latest_color_styles: Colors parsed this run
        latest_text_styles: Text styles parsed this run
        previous_color_styles: Colors from the snapshot
        previous_text_styles: Text styles from the snapshot

    Returns:
        StyleChangeSet describing differences
    """
    color_parser = StyleParser(latest_color_styles)
    text_parser = StyleParser(latest_text_styles)

    return StyleChangeSet(
        colors_added=[s.name for s in color_parser.added_styles(previous_color_styles)],
        colors_deprecated=[
            s.name
            for s in color_parser.newly_deprecated_styles(previous_color_styles)
        ],
        colors_renamed=[
            (old.name, new.name)
            for old, new in color_parser.migrated_pairs(previous_color_styles)
        ],
        colors_updated=[u.style_name for u in color_parser.updated_styles(previous_color_styles)],
        text_styles_added=[s.name for s in text_parser.added_styles(previous_text_styles)],
        text_styles_deprecated=[
            s.name
            for s in text_parser.newly_deprecated_styles(previous_text_styles)
        ],
        text_styles_renamed=[
            (old.name, new.name)
            for old, new in text_parser.migrated_pairs(previous_text_styles)
        ],
        text_styles_updated=[u.style_name for u in text_parser.updated_styles(previous_text_styles)],
    )


__all__ = [
    "StyleParser",
    "StyleChangeSet",
    "detect_style_changes",
]
