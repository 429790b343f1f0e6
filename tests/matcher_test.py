#!/usr/bin/env python
import random
import unittest
from minire.compiler import compile_pattern
from minire.matcher import (
    attempt_match, atom_match_length, is_full_match,
    MATCH_FULL, RE_LEGACY_GROUP_OFFSET, RE_LEGACY_STAR_OFFSET, UnsupportedGroupMatch,
)
from minire.tree import Char, PatternSyntaxError, Wildcard

BOTH_OFFSET_FLAGS = RE_LEGACY_GROUP_OFFSET | RE_LEGACY_STAR_OFFSET

# (pattern, matching texts, non-matching texts); these hold with and without
# the legacy flags.
COMMON_CASES = [
    ("abc", ["abc"], ["ab", "abcd", "abx", ""]),
    ("a.c", ["abc", "azc", "a.c"], ["ac", "abbc"]),
    ("ab.?c", ["abc", "abdc"], ["abcde", "ab"]),
    ("a+b*\\.", ["abbb.", "aaaa.", "a."], ["b.", "ab!", "."]),
    ("a.*b", ["ab", "asadf.b", "abbb"], ["a", "ba", "abc"]),
    ("a\\.b", ["a.b"], ["axb", "ab"]),
    ("", [""], ["a", " "]),
    ("*a", ["*a"], ["a", "aa"]),
    ("caf.", ["café", "cafe"], ["caf"]),
]


def match(pattern, text, flags=0):
    return is_full_match(compile_pattern(pattern), text, flags)


class MatcherTest(unittest.TestCase):
    def test_common_cases(self):
        for flags in (0, RE_LEGACY_GROUP_OFFSET, RE_LEGACY_STAR_OFFSET, BOTH_OFFSET_FLAGS):
            for pattern, good, bad in COMMON_CASES:
                for text in good:
                    with self.subTest(pattern=pattern, text=text, flags=flags):
                        self.assertTrue(match(pattern, text, flags))
                for text in bad:
                    with self.subTest(pattern=pattern, text=text, flags=flags):
                        self.assertFalse(match(pattern, text, flags))

    def test_quantifier_at_end_of_input(self):
        self.assertTrue(match("a?", ""))
        self.assertFalse(match("a?b", ""))
        self.assertFalse(match("a*b", ""))
        self.assertTrue(match("ab?", "a"))

    def test_escaped_metacharacters(self):
        self.assertTrue(match("a\\*", "a*"))
        self.assertFalse(match("a\\*", "aaa"))
        self.assertTrue(match("\\(x\\)", "(x)"))

    def test_attempt_match_partial_outcome(self):
        tokens = compile_pattern("abc").tokens
        self.assertEqual(attempt_match(tokens, "abc"), MATCH_FULL)
        self.assertEqual(attempt_match(tokens, "abx"), 2)
        self.assertEqual(attempt_match(tokens, "ab"), 2)
        self.assertEqual(attempt_match(tokens, "xyz"), 0)

    def test_attempt_match_on_suffixes(self):
        tokens = compile_pattern("abc").tokens
        # tokens[1:] against text[1:]
        self.assertEqual(attempt_match(tokens, "abc", 1, 1), MATCH_FULL)
        self.assertEqual(attempt_match(tokens, "xbc", 1, 1), MATCH_FULL)
        self.assertEqual(attempt_match(tokens, "abc", 0, 1), 0)

    def test_atom_match_length(self):
        self.assertEqual(atom_match_length(Wildcard(), "xy", 0, 1), 1)
        self.assertEqual(atom_match_length(Char('y'), "xy", 0, 1), 1)
        self.assertEqual(atom_match_length(Char('x'), "xy", 0, 1), 0)
        self.assertEqual(atom_match_length(Char('y'), "xy", 1, 0), 1)
        self.assertEqual(atom_match_length(Wildcard(), "xy", 0, 2), 0)

    def test_rejects_non_string(self):
        with self.assertRaises(TypeError):
            is_full_match(compile_pattern("a"), b"a")


class GroupOffsetTest(unittest.TestCase):
    """
    Groups are evaluated at the consumed offset by default. With
    RE_LEGACY_GROUP_OFFSET they are evaluated from the start of the input,
    so only a group reached before anything was consumed behaves as expected.
    """

    def test_leading_group(self):
        for flags in (0, RE_LEGACY_GROUP_OFFSET):
            with self.subTest(flags=flags):
                self.assertTrue(match("(ab)c", "abc", flags))
                self.assertFalse(match("(ab)c", "abd", flags))

    def test_group_after_consumed_input(self):
        self.assertTrue(match("x(ab)", "xab"))
        self.assertTrue(match("x(ab)y", "xaby"))
        self.assertFalse(match("x(ab)", "xab", RE_LEGACY_GROUP_OFFSET))

    def test_group_consuming_the_whole_input(self):
        self.assertTrue(match("(ab)", "ab"))
        self.assertTrue(match("((ab))", "ab"))

    def test_legacy_group_full_match_is_not_swallowed(self):
        with self.assertRaises(UnsupportedGroupMatch):
            match("(ab)", "ab", RE_LEGACY_GROUP_OFFSET)

    def test_quantified_groups(self):
        self.assertTrue(match("(ab)*", "abab"))
        self.assertTrue(match("(ab)*", ""))
        self.assertTrue(match("a(bc)?d", "ad"))
        self.assertTrue(match("a(bc)?d", "abcd"))
        self.assertFalse(match("a(bc)?d", "axd"))

    def test_partial_group_counts_its_prefix(self):
        # A group that stops partway still consumes what it got through.
        self.assertTrue(match("x(ab)", "xa"))
        self.assertTrue(match("(abc)", "a"))
        self.assertTrue(match("(ab)c", "ac"))

    def test_nested_groups(self):
        self.assertTrue(match("((ab)c)d", "abcd"))
        self.assertFalse(match("((ab)c)d", "abce"))


class StarOffsetTest(unittest.TestCase):
    """
    By default the '*' loop starts at the consumed offset and advances by the
    length of each repetition. With RE_LEGACY_STAR_OFFSET it starts at the
    position of the token after the star and advances by one.
    """

    def test_star_followed_by_more_tokens(self):
        for flags in (0, RE_LEGACY_STAR_OFFSET):
            with self.subTest(flags=flags):
                self.assertTrue(match("xa*y", "xaaay", flags))
                self.assertTrue(match("xa*y", "xy", flags))

    def test_legacy_loop_skips_the_first_character(self):
        self.assertFalse(match("xa*y", "xby"))
        self.assertTrue(match("xa*y", "xby", RE_LEGACY_STAR_OFFSET))

    def test_trailing_star(self):
        self.assertTrue(match("a*", "aa"))
        self.assertTrue(match("ab*", "abbb"))
        self.assertTrue(match("ab*", "a"))
        self.assertFalse(match("a*", "aa", RE_LEGACY_STAR_OFFSET))
        self.assertFalse(match("ab*", "abbb", RE_LEGACY_STAR_OFFSET))
        self.assertTrue(match("ab*", "a", RE_LEGACY_STAR_OFFSET))

    def test_legacy_overshoot_is_not_a_full_match(self):
        # Legacy repetitions can count more characters than the input holds.
        self.assertTrue(match("a*a*b*", "aaaa"))
        self.assertFalse(match("a*a*b*", "aaaa", RE_LEGACY_STAR_OFFSET))

    def test_multi_character_group_before_star(self):
        self.assertTrue(match("(abc)d*", "abcdd"))
        self.assertFalse(match("(abc)d*", "abcdd", RE_LEGACY_STAR_OFFSET))

    def test_group_repetitions_advance_by_their_length(self):
        self.assertTrue(match("x(ab)*", "xabab"))
        self.assertFalse(match("x(ab)*", "xabab", RE_LEGACY_STAR_OFFSET))


class GeneratedPatternTest(unittest.TestCase):
    """Every pattern that compiles gives a plain bool for every text."""

    ALPHABET = "ab.*+?()\\"
    SEED = 20261018
    CASES = 3000

    def test_matching_always_returns_bool(self):
        rng = random.Random(self.SEED)
        for _ in range(self.CASES):
            pattern = "".join(rng.choice(self.ALPHABET) for _ in range(rng.randint(0, 8)))
            text = "".join(rng.choice("ab.") for _ in range(rng.randint(0, 6)))
            try:
                tree = compile_pattern(pattern)
            except PatternSyntaxError:
                continue
            with self.subTest(pattern=pattern, text=text):
                self.assertIsInstance(is_full_match(tree, text), bool)


if __name__ == "__main__":
    unittest.main()
