"""Case-insensitive shell-style name patterns used for exclusions."""

from __future__ import annotations

import re
from typing import Iterable


class NamePattern:
    """A compiled glob matched against a bare file or folder name.

    ``*`` matches any run of characters (including none), ``?`` matches
    exactly one character; everything else is literal.  Matching is
    anchored at both ends and ignores case regardless of the filesystem.
    """

    __slots__ = ("pattern", "_regex")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._regex = re.compile(_translate(pattern), re.IGNORECASE | re.DOTALL)

    def matches(self, name: str) -> bool:
        return self._regex.fullmatch(name) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamePattern):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"NamePattern({self.pattern!r})"


def _translate(pattern: str) -> str:
    """Turn *pattern* into a regex body.  ``[`` and ``\\`` stay literal."""
    return re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")


def compile_pattern(pattern: str) -> NamePattern:
    """Compile one glob *pattern* into a :class:`NamePattern`."""
    return NamePattern(pattern)


def is_excluded(name: str, patterns: Iterable[NamePattern]) -> bool:
    """True if any of *patterns* matches *name*."""
    return any(p.matches(name) for p in patterns)
