"""
Core Module for minire

This module is the public API. It ties the compiler and the matcher together
behind a compile-and-hold type:

    >>> from minire.core import Regexp
    >>> expr = Regexp.compile("ab.?c")
    >>> expr.is_full_match("abdc")
    True

A compiled Regexp is immutable and can be shared between threads; matching
never mutates it.

Flags (combine with '|'):
  RE_LEGACY_PAREN_SCAN   - see minire.compiler.
  RE_LEGACY_GROUP_OFFSET - see minire.matcher.
  RE_LEGACY_STAR_OFFSET  - see minire.matcher.
  RE_LEGACY              - all of the above.
"""

from dataclasses import dataclass

from .compiler import RE_LEGACY_PAREN_SCAN, compile_pattern
from .matcher import RE_LEGACY_GROUP_OFFSET, RE_LEGACY_STAR_OFFSET, UnsupportedGroupMatch, is_full_match
from .tree import PatternSyntaxError, PatternTree

RE_LEGACY = RE_LEGACY_PAREN_SCAN | RE_LEGACY_GROUP_OFFSET | RE_LEGACY_STAR_OFFSET

__all__ = [
    "Regexp",
    "PatternSyntaxError",
    "UnsupportedGroupMatch",
    "compile",
    "fullmatch",
    "RE_LEGACY",
    "RE_LEGACY_PAREN_SCAN",
    "RE_LEGACY_GROUP_OFFSET",
    "RE_LEGACY_STAR_OFFSET",
]


@dataclass(frozen=True)
class Regexp:
    """A compiled pattern together with the flags it was compiled with."""

    pattern: str
    tree: PatternTree
    flags: int = 0

    @classmethod
    def compile(cls, pattern: str, flags: int = 0) -> "Regexp":
        """
        Compile `pattern`.

        Raises:
            PatternSyntaxError: If a '(' is never closed.
        """
        return cls(pattern, compile_pattern(pattern, flags), flags)

    def is_full_match(self, text: str) -> bool:
        """Return True if the pattern consumes the entire `text`."""
        return is_full_match(self.tree, text, self.flags)

    def __repr__(self) -> str:
        if self.flags:
            return f"Regexp({self.pattern!r}, flags={self.flags})"
        return f"Regexp({self.pattern!r})"


def compile(pattern: str, flags: int = 0) -> Regexp:
    """Shorthand for Regexp.compile()."""
    return Regexp.compile(pattern, flags)


def fullmatch(pattern: str, text: str, flags: int = 0) -> bool:
    """
    Compile `pattern` and test `text` against it in one call.

    Parameters:
        pattern (str): The pattern to compile.
        text (str): The text to match.
        flags (int): Any combination of the RE_LEGACY_* flags.

    Returns:
        bool: True if `text` is fully matched.
    """
    return Regexp.compile(pattern, flags).is_full_match(text)
