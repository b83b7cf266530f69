"""
Version numbers for the exported style set.

Consumers of the generated code care about one thing: will their code still
compile without warnings. Deprecations and renames are therefore major
changes; new styles and attribute updates are minor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .changes import StyleChangeSet

_VERSION_PATTERN = re.compile(r"^\s*v?(\d+)\.(\d+)\s*$")


@dataclass(frozen=True, order=True)
class StyleVersion:
    """A ``major.minor`` style set version."""

    major: int
    minor: int

    @classmethod
    def parse(cls, value: str) -> StyleVersion:
        """
        Parse ``"1.2"`` (or ``"v1.2"``).

        Raises:
            ValueError: If the string is not a version
        """
        match = _VERSION_PATTERN.match(value)
        if not match:
            raise ValueError(f"Invalid style version: {value!r}")
        return cls(major=int(match.group(1)), minor=int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    def bumped_major(self) -> StyleVersion:
        return StyleVersion(self.major + 1, 0)

    def bumped_minor(self) -> StyleVersion:
        return StyleVersion(self.major, self.minor + 1)


FIRST_VERSION = StyleVersion(1, 0)


def next_version(current: StyleVersion, changes: StyleChangeSet) -> StyleVersion:
    """
    Compute the version of the style set after applying ``changes``.

    Args:
        current: Version recorded by the previous export
        changes: What changed this run

    Returns:
        Bumped version, or ``current`` when nothing changed
    """
    if changes.has_breaking_changes:
        return current.bumped_major()
    if changes.has_additive_changes:
        return current.bumped_minor()
    return current


__all__ = [
    "StyleVersion",
    "FIRST_VERSION",
    "next_version",
]
