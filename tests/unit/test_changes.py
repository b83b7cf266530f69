"""
Unit tests for change detection between exports.
"""

from stylesync.core.changes import StyleChangeSet, StyleParser, detect_style_changes
from stylesync.core.ir import ColorStyle, TextStyle


def _color(identifier: str, name: str, red: float = 0.0) -> ColorStyle:
    return ColorStyle(name=name, identifier=identifier, red=red, green=0, blue=0)


class TestStyleParser:
    """Tests for StyleParser."""

    def test_no_previous_styles_means_nothing_deprecated(self) -> None:
        parser = StyleParser([_color("C1", "Brand")])

        assert parser.deprecated_styles([]) == []
        assert parser.migrated_pairs([]) == []
        assert parser.updated_styles([]) == []

    def test_deprecated_styles_are_exactly_the_missing_identifiers(self) -> None:
        kept = _color("C1", "Brand")
        gone = _color("C2", "Gone")
        also_gone = _color("C3", "Also Gone")
        parser = StyleParser([kept, _color("C4", "New")])

        deprecated = parser.deprecated_styles([gone, kept, also_gone])

        assert deprecated == [gone.deprecated, also_gone.deprecated]
        assert all(style.is_deprecated for style in deprecated)

    def test_already_deprecated_styles_are_not_newly_deprecated(self) -> None:
        parser = StyleParser([])
        old = _color("C2", "Old").deprecated

        assert parser.deprecated_styles([old]) == [old]
        assert parser.newly_deprecated_styles([old]) == []

    def test_migrated_pairs(self) -> None:
        old = _color("C2", "Old")
        new = _color("C2", "New")
        parser = StyleParser([new, _color("C1", "Brand")])

        assert parser.migrated_pairs([old, _color("C1", "Brand")]) == [(old, new)]

    def test_first_duplicate_identifier_wins(self) -> None:
        first = _color("C1", "First")
        parser = StyleParser([first, _color("C1", "Second")])

        assert parser.current_style("C1") == first
        assert parser.current_style("C9") is None

    def test_added_styles(self) -> None:
        parser = StyleParser([_color("C1", "Brand"), _color("C2", "Accent")])

        assert [s.name for s in parser.added_styles([_color("C1", "Brand")])] == ["Accent"]

    def test_updated_styles_cover_attribute_changes(self) -> None:
        parser = StyleParser([_color("C1", "Brand", red=1.0)])

        updates = parser.updated_styles([_color("C1", "Brand", red=0.0)])

        assert len(updates) == 1
        assert updates[0].style_name == "Brand"
        assert "red" in [a.attribute_name for a in updates[0].updated_attributes]

    def test_text_styles(self, body_text: TextStyle) -> None:
        bigger = body_text.model_copy(update={"point_size": 18.0})

        updates = StyleParser([bigger]).updated_styles([body_text])

        assert [a.describe() for a in updates[0].updated_attributes] == ["pointSize: 16.0 -> 18.0"]


class TestStyleChangeSet:
    def test_empty(self) -> None:
        change_set = StyleChangeSet()

        assert change_set.is_empty()
        assert "No changes" in change_set.summary()

    def test_detect_style_changes(self, body_text: TextStyle) -> None:
        change_set = detect_style_changes(
            latest_color_styles=[_color("C2", "New"), _color("C5", "Added")],
            latest_text_styles=[],
            previous_color_styles=[_color("C2", "Old"), _color("C3", "Gone")],
            previous_text_styles=[body_text],
        )

        assert change_set.colors_added == ["Added"]
        assert change_set.colors_deprecated == ["Gone"]
        assert change_set.colors_renamed == [("Old", "New")]
        assert change_set.colors_updated == ["New"]
        assert change_set.text_styles_deprecated == ["Body"]
        assert change_set.has_breaking_changes
        assert "Old -> New" in change_set.summary()

    def test_additive_only(self) -> None:
        change_set = detect_style_changes([_color("C1", "Brand")], [], [], [])

        assert change_set.has_additive_changes
        assert not change_set.has_breaking_changes
