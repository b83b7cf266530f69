"""
String utility functions for stylesync.

Provides the transformations that turn a designer's style name into the
identifier used in generated source code.
"""

from __future__ import annotations

import re

# Anything that is not a letter or digit separates words
_WORD_SEPARATOR = re.compile(r"[^0-9A-Za-z]+")

# Boundaries inside an already camel-cased word (e.g. "brandBlue", "HTTPLink")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(name: str) -> list[str]:
    """
    Split a display name into words.

    Splits on whitespace, punctuation and camel-case boundaries.

    Examples:
        >>> split_words("Brand / Primary Blue")
        ['Brand', 'Primary', 'Blue']
        >>> split_words("headingLarge")
        ['heading', 'Large']
    """
    words: list[str] = []
    for chunk in _WORD_SEPARATOR.split(name):
        if chunk:
            words.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return words


def camelcased(name: str) -> str:
    """
    Convert a display name to a lower camel-case code identifier.

    The first word is lower-cased; every following word has its first letter
    upper-cased and the rest lower-cased. A leading digit gets an underscore
    prefix so the result is a valid identifier in most languages.

    Args:
        name: Style name as written by the designer

    Returns:
        camelCase identifier, or an empty string for a name without words

    Examples:
        >>> camelcased("Deprecated Text Style")
        'deprecatedTextStyle'
        >>> camelcased("Deprecated")
        'deprecated'
        >>> camelcased("Heading / H1 Bold")
        'headingH1Bold'
        >>> camelcased("2x Large")
        '_2xLarge'
    """
    words = split_words(name)
    if not words:
        return ""

    first, rest = words[0], words[1:]
    result = first.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)
    if result[0].isdigit():
        result = "_" + result
    return result


def round_to_two_decimal_places(value: float) -> float:
    """Round a measurement so repeated exports do not drift on float noise."""
    return round(float(value), 2)


__all__ = [
    "split_words",
    "camelcased",
    "round_to_two_decimal_places",
]
