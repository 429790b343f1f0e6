# minire/compiler.py
"""
Pattern compiler for minire.

Turns a pattern string into a PatternTree. The syntax is small:
  - '.' matches any single character.
  - '*' makes the previous token match zero or more times.
  - '+' makes the previous token match one or more times (compiled as the
    token followed by a starred copy of its atom).
  - '?' makes the previous token optional.
  - '(' ... ')' groups a sub-pattern into a single atom.
  - '\\X' is always the literal character X.
Any other character matches itself. A quantifier character that has no
unquantified token before it is a literal too, as is a ')' that closes
nothing.

Flags:
  RE_LEGACY_PAREN_SCAN - Find the ')' closing a group by taking the rightmost
                         unescaped ')' of the remaining text, without tracking
                         nesting depth. Sibling groups like "(a)(b)" are
                         mis-paired in this mode.
                         (Default: a forward scan that tracks nesting depth.)
"""

import logging
from typing import List, Optional

from .tree import Char, Group, PatternSyntaxError, PatternTree, Quantifier, Token, Wildcard

RE_LEGACY_PAREN_SCAN = 1

QUANTIFIERS = {
    '*': Quantifier.STAR,
    '+': Quantifier.STAR,
    '?': Quantifier.OPTIONAL,
}


def _is_escaped(pattern: str, index: int, start: int) -> bool:
    # Only the single preceding source character is consulted.
    return index > start and pattern[index - 1] == '\\'


def find_group_close(pattern: str, open_index: int, end: int, flags: int = 0) -> Optional[int]:
    """
    Locate the ')' that closes the '(' at `open_index`.

    Only pattern[open_index:end] is searched. Returns the index of the ')' or
    None if there is no acceptable one.
    """
    if flags & RE_LEGACY_PAREN_SCAN:
        for j in range(end - 1, open_index, -1):
            if pattern[j] == ')' and pattern[j - 1] != '\\':
                return j
        return None

    depth = 1
    for j in range(open_index + 1, end):
        if _is_escaped(pattern, j, open_index):
            continue
        if pattern[j] == '(':
            depth += 1
        elif pattern[j] == ')':
            depth -= 1
            if depth == 0:
                return j
    return None


def _compile_range(pattern: str, start: int, end: int, flags: int) -> PatternTree:
    tokens: List[Token] = []
    i = start
    while i < end:
        ch = pattern[i]
        last_is_exact = bool(tokens) and tokens[-1].quantifier is Quantifier.EXACT

        if _is_escaped(pattern, i, start):
            # The backslash was pushed as a literal on the previous step.
            tokens[-1] = Token(Char(ch))
        elif ch == '.':
            tokens.append(Token(Wildcard()))
        elif ch == '(':
            close = find_group_close(pattern, i, end, flags)
            if close is None:
                raise PatternSyntaxError(f"unclosed parenthesis at index {i}", i, pattern)
            logging.debug(f"Compiling group {pattern[i:close + 1]!r} at index {i}")
            nested = _compile_range(pattern, i + 1, close, flags)
            tokens.append(Token(Group(nested)))
            i = close + 1
            continue
        elif ch in QUANTIFIERS and last_is_exact:
            last = tokens[-1]
            if ch == '+':
                tokens.append(last.with_quantifier(Quantifier.STAR))
            else:
                tokens[-1] = last.with_quantifier(QUANTIFIERS[ch])
        else:
            if ch in QUANTIFIERS:
                logging.debug(f"Quantifier {ch!r} at index {i} has nothing to quantify; treating it as a literal")
            tokens.append(Token(Char(ch)))
        i += 1

    return PatternTree(tuple(tokens))


def compile_pattern(pattern: str, flags: int = 0) -> PatternTree:
    """
    Compile `pattern` into a PatternTree.

    Parameters:
        pattern (str): The pattern source.
        flags (int): Compile flags (RE_LEGACY_PAREN_SCAN). Match-time flags are
                     accepted and ignored here.

    Returns:
        PatternTree: The immutable compiled tree.

    Raises:
        PatternSyntaxError: If a '(' has no closing ')'. The error index is the
                            position of the '(' in `pattern`, also for groups
                            nested inside other groups.
        TypeError: If `pattern` is not a string.
    """
    if not isinstance(pattern, str):
        raise TypeError(f"pattern must be a str, not {type(pattern).__name__}")
    return _compile_range(pattern, 0, len(pattern), flags)
