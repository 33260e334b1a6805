"""
Utility functions for JSON Schema to TypeScript generator.
"""

import re

# Anything that is not a word character or a space is dropped from titles
_STRIP_PATTERN = re.compile(r"[^\w ]")

# A run of spaces, optionally followed by the character that starts the next word
_WORD_BOUNDARY_PATTERN = re.compile(r" +(\w)?")

# Property names that can be written without quotes
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*$")


def _join_words(match: re.Match) -> str:
    """Drop the spaces and uppercase the first character of the next word."""
    return (match.group(1) or "").upper()


def tsify_string(text: str | None) -> str:
    """Derive a type identifier from a free-text title.

    Examples:
        "user_profile data!" -> "UserProfileData"
        "Already Title" -> "AlreadyTitle"
        "foo" -> "Foo"
        "!!!" -> ""

    Args:
        text: The title to convert

    Returns:
        The identifier, or an empty string when nothing usable is left
    """
    if not text:
        return ""
    stripped = _STRIP_PATTERN.sub("", text).replace("_", " ")
    joined = _WORD_BOUNDARY_PATTERN.sub(_join_words, stripped)
    return joined[:1].upper() + joined[1:]


def is_identifier(name: str) -> bool:
    """Check whether a property name can be emitted without quotes."""
    return bool(_IDENTIFIER_PATTERN.match(name))
