# minire/matcher.py
"""
Recursive backtracking matcher for minire.

The matcher walks a compiled PatternTree against an input string and decides
whether the whole input is consumed (an implicit anchor at both ends; there is
no search mode). It never builds an automaton: quantifiers are resolved by
recursing into the tail of the token sequence, so running time is exponential
in the worst case and recursion depth grows with the input length and the
group nesting depth. Callers that need bounded latency must cap the input size
themselves.

Tail calls are made with index parameters into the shared token tuple and the
shared input string instead of slicing either of them.

Outcomes of attempt_match():
  MATCH_FULL - every remaining input character was consumed.
  n >= 0     - matching stopped after consuming n characters (a partial outcome).

Flags:
  RE_LEGACY_GROUP_OFFSET - Evaluate a group atom from the start of the current
                           call's input rather than from the consumed offset.
                           A group reporting a full match raises
                           UnsupportedGroupMatch in this mode.
  RE_LEGACY_STAR_OFFSET  - Start the '*' repetition loop at the position of the
                           token after the star (relative to the current call)
                           and advance it by one per repetition, instead of
                           starting at the consumed offset and advancing by the
                           length each repetition matched.
(Default: both corrected behaviours.)
"""

import logging
from typing import Sequence

from .tree import Char, Group, PatternTree, Quantifier, Token, Wildcard

# Outcome constant; partial outcomes are non-negative character counts.
MATCH_FULL = -1

RE_LEGACY_GROUP_OFFSET = 2
RE_LEGACY_STAR_OFFSET = 4


class UnsupportedGroupMatch(RuntimeError):
    """A legacy-offset group consumed all of its input and reported a full match."""


def atom_match_length(atom, text: str, base: int, offset: int, flags: int = 0) -> int:
    """
    Return how many characters `atom` matches at text[base + offset].

    `base` is where the current attempt_match() call starts in `text`; `offset`
    is relative to it. A length of 0 means the atom does not match there.
    """
    pos = base + offset
    if pos >= len(text):
        return 0
    if isinstance(atom, Wildcard):
        return 1
    if isinstance(atom, Char):
        return 1 if text[pos] == atom.ch else 0
    if isinstance(atom, Group):
        if flags & RE_LEGACY_GROUP_OFFSET:
            result = attempt_match(atom.tree.tokens, text, 0, base, flags)
            if result == MATCH_FULL:
                logging.debug(f"Group {atom.tree!r} fully matched {text[base:]!r} from offset {base}")
                raise UnsupportedGroupMatch(
                    f"group fully matched the remaining input {text[base:]!r}; "
                    "this case is not supported with RE_LEGACY_GROUP_OFFSET"
                )
            return result
        result = attempt_match(atom.tree.tokens, text, 0, pos, flags)
        # A full match of the group means it consumed everything that is left.
        return len(text) - pos if result == MATCH_FULL else result
    raise TypeError(f"unknown atom {atom!r}")


def attempt_match(tokens: Sequence[Token], text: str, start: int = 0, base: int = 0, flags: int = 0) -> int:
    """
    Match tokens[start:] against text[base:].

    Returns MATCH_FULL if the token suffix consumes the whole input suffix,
    otherwise the number of input characters consumed before matching could
    proceed no further.
    """
    remaining = len(text) - base
    last = len(tokens) - 1
    consumed = 0
    i = start

    while i < len(tokens):
        token = tokens[i]
        atom = token.atom

        if token.quantifier is Quantifier.EXACT:
            if consumed >= remaining:
                return consumed
            length = atom_match_length(atom, text, base, consumed, flags)
            if length == 0:
                return consumed
            i += 1
            consumed += length

        elif token.quantifier is Quantifier.STAR:
            # Only exhaustion stops here. A legacy overshoot past the end
            # still runs the repetition loop below.
            if consumed == remaining:
                return MATCH_FULL if i == last else consumed
            i += 1
            if flags & RE_LEGACY_STAR_OFFSET:
                offset = i - start
            else:
                offset = consumed
            # Zero repetitions first, then one more each time the rest fails.
            while offset < remaining:
                if attempt_match(tokens, text, i, base + offset, flags) == MATCH_FULL:
                    return MATCH_FULL
                length = atom_match_length(atom, text, base, offset, flags)
                if length == 0:
                    break
                consumed += length
                offset += 1 if flags & RE_LEGACY_STAR_OFFSET else length

        else:  # Quantifier.OPTIONAL
            if consumed > remaining:
                return consumed
            if consumed == remaining:
                return MATCH_FULL if i == last else consumed
            i += 1
            if attempt_match(tokens, text, i, base + consumed, flags) == MATCH_FULL:
                return MATCH_FULL
            consumed += atom_match_length(atom, text, base, consumed, flags)

    return MATCH_FULL if consumed == remaining else consumed


def is_full_match(tree: PatternTree, text: str, flags: int = 0) -> bool:
    """
    Return True if `tree` consumes all of `text`.

    Parameters:
        tree (PatternTree): A compiled pattern.
        text (str): The input to test.
        flags (int): Match flags (RE_LEGACY_GROUP_OFFSET, RE_LEGACY_STAR_OFFSET).

    Returns:
        bool: True on a full match, False otherwise. With the default flags this
              never raises for a string input.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, not {type(text).__name__}")
    return attempt_match(tree.tokens, text, 0, 0, flags) == MATCH_FULL
