"""
Unit tests for style set versioning.
"""

import pytest

from stylesync.core.changes import StyleChangeSet
from stylesync.core.versioning import FIRST_VERSION, StyleVersion, next_version


class TestStyleVersion:
    @pytest.mark.parametrize("value", ["1.2", "v1.2", " 1.2 "])
    def test_parse(self, value: str) -> None:
        assert StyleVersion.parse(value) == StyleVersion(1, 2)

    @pytest.mark.parametrize("value", ["", "1", "1.2.3", "one.two"])
    def test_parse_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            StyleVersion.parse(value)

    def test_str(self) -> None:
        assert str(StyleVersion(3, 14)) == "3.14"

    def test_ordering(self) -> None:
        assert StyleVersion(1, 9) < StyleVersion(2, 0) < StyleVersion(2, 1)


class TestNextVersion:
    def test_breaking_changes_bump_major(self) -> None:
        changes = StyleChangeSet(colors_deprecated=["Old"], text_styles_added=["Body"])

        assert next_version(StyleVersion(1, 3), changes) == StyleVersion(2, 0)

    def test_renames_are_breaking(self) -> None:
        changes = StyleChangeSet(text_styles_renamed=[("Old", "New")])

        assert next_version(FIRST_VERSION, changes) == StyleVersion(2, 0)

    def test_additive_changes_bump_minor(self) -> None:
        changes = StyleChangeSet(colors_updated=["Brand"])

        assert next_version(StyleVersion(1, 3), changes) == StyleVersion(1, 4)

    def test_no_changes_keep_version(self) -> None:
        assert next_version(StyleVersion(1, 3), StyleChangeSet()) == StyleVersion(1, 3)
