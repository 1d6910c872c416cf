"""
Tokenizer and text normalization for keyword search.

Pipeline:
1. Lowercase conversion
2. Split on whitespace and common punctuation (hyphens and underscores stay inside words)
3. Drop short fragments (length <= 2) such as "a", "to", "of"

Markup stripping turns rich step bodies into plain text before scoring.
All functions are pure and never raise; None or empty input yields empty output.
"""

import re
from typing import Iterator, Optional, Tuple

# Minimum token length kept by tokenize(); shorter fragments are mostly stop-words
MIN_TOKEN_LENGTH = 3

_SPLIT_PATTERN = re.compile(r"[\s.,;:!?()\[\]{}<>\"'`/\\|@#$%^&*+=~]+")
_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
    """
    Lowercase and trim text.

    Examples:
        >>> normalize("  Password Reset ")
        'password reset'
        >>> normalize(None)
        ''
    """
    if not text:
        return ""
    return text.lower().strip()


def tokenize(text: Optional[str]) -> Iterator[str]:
    """
    Lazily yield lowercase tokens from text.

    Each call returns a fresh generator, so callers that need to walk the
    tokens more than once should materialize them with list().

    Examples:
        >>> list(tokenize("Reset the user's password!"))
        ['reset', 'the', 'user', 'password']

        >>> list(tokenize("VPN set-up on macOS"))
        ['vpn', 'set-up', 'macos']

        >>> list(tokenize("   "))
        []
    """
    if not text:
        return
    for token in _SPLIT_PATTERN.split(text.lower()):
        if len(token) >= MIN_TOKEN_LENGTH:
            yield token


def strip_markup(rich_text: Optional[str]) -> str:
    """
    Remove markup tags, collapse whitespace and trim.

    Each tag span is replaced by a single space so that adjacent block
    elements don't glue words together.

    Examples:
        >>> strip_markup("<p>Open <b>Settings</b></p><p>Click Save</p>")
        'Open Settings Click Save'
    """
    if not rich_text:
        return ""
    text = _TAG_PATTERN.sub(" ", rich_text)
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def count_occurrences(haystack: str, needle: str) -> int:
    """
    Count non-overlapping literal occurrences of needle in haystack.

    Plain substring scanning: the needle is never interpreted as a pattern.

    Examples:
        >>> count_occurrences("aaaa", "aa")
        2
        >>> count_occurrences("c++ and c++", "c++")
        2
    """
    if not haystack or not needle:
        return 0
    count = 0
    position = haystack.find(needle)
    while position != -1:
        count += 1
        position = haystack.find(needle, position + len(needle))
    return count


def find_span(text: str, needle: str) -> Optional[Tuple[int, int]]:
    """
    Locate the first case-insensitive match of a lowercase needle.

    Returns (start, end) offsets into the original text, or None. Some
    characters lowercase to more than one code point ("İ" -> "i̇"), so
    offsets found in text.lower() are mapped back character by character.

    Examples:
        >>> find_span("Reset VPN token", "vpn")
        (6, 9)
        >>> find_span("İİ vpn", "vpn")
        (3, 6)
    """
    if not text or not needle:
        return None
    lowered = text.lower()
    index = lowered.find(needle)
    if index == -1:
        return None
    if len(lowered) == len(text):
        return index, index + len(needle)

    start = end = None
    position = 0
    last = index + len(needle) - 1
    for offset, char in enumerate(text):
        position += len(char.lower())
        if start is None and position > index:
            start = offset
        if position > last:
            end = offset + 1
            break
    return start, end
