# minire/tree.py
"""
Pattern Tree data model for minire.

A compiled pattern is an ordered sequence of tokens, each token pairing an
atom (what to match) with a quantifier (how many times). A group atom owns
a complete nested PatternTree, so the whole structure is a tree whose depth
equals the parenthesis nesting depth of the source pattern.

Every class here is a frozen dataclass: once the compiler has produced a
tree nothing can change it, which makes it safe to share between threads
and to compare by value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class Quantifier(Enum):
    EXACT = "exact"        # The atom must match exactly once.
    STAR = "star"          # Zero or more times.
    OPTIONAL = "optional"  # Zero or one time.


@dataclass(frozen=True)
class Wildcard:
    """Matches any single character."""


@dataclass(frozen=True)
class Char:
    """Matches exactly the character `ch`."""

    ch: str


@dataclass(frozen=True)
class Group:
    """A parenthesized sub-pattern, treated as a single atom."""

    tree: "PatternTree"


Atom = Union[Wildcard, Char, Group]


@dataclass(frozen=True)
class Token:
    atom: Atom
    quantifier: Quantifier = Quantifier.EXACT

    def with_quantifier(self, quantifier: Quantifier) -> "Token":
        return Token(self.atom, quantifier)


@dataclass(frozen=True)
class PatternTree:
    """
    Ordered token sequence; sequence order is match order.

    An empty tree matches only the empty input.
    """

    tokens: Tuple[Token, ...] = ()

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def depth(self) -> int:
        """Return the group nesting depth (0 for a tree without groups)."""
        nested = [t.atom.tree.depth() + 1 for t in self.tokens if isinstance(t.atom, Group)]
        return max(nested, default=0)


class PatternSyntaxError(ValueError):
    """
    Raised by the compiler when a pattern cannot be compiled.

    The only failure is a '(' without a validly positioned ')'. `index` is the
    position of that '(' in the original pattern string.
    """

    def __init__(self, message: str, index: int, pattern: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.index = index
        self.pattern = pattern

    def __str__(self) -> str:
        return self.message
