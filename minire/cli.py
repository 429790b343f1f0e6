#!/usr/bin/env python
"""
Command-line front end for minire.

Compiles a pattern once and prints the texts it fully matches. Texts are taken
from the positional arguments, or read line by line from a file or stdin.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .core import (
    RE_LEGACY,
    RE_LEGACY_GROUP_OFFSET,
    RE_LEGACY_PAREN_SCAN,
    RE_LEGACY_STAR_OFFSET,
    PatternSyntaxError,
    Regexp,
)

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_SYNTAX_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minire",
        description="Tests texts against a minire pattern. A text is selected only if the pattern matches all of it. "
                    "Supported syntax: literal characters, '.', '*', '+', '?', '(...)' groups and '\\' escapes.",
        epilog="Exit status is 0 if any text was selected, 1 if none was, 2 on a pattern syntax error."
    )
    parser.add_argument("pattern", help="Pattern to compile")
    parser.add_argument("texts", nargs="*", help="Texts to test (default: read lines from --input-file or stdin)")
    parser.add_argument("--input-file", "-i", help="Read texts from this file, one per line")
    parser.add_argument("--output-file", "-o", help="Write output to this file instead of stdout")
    parser.add_argument("--invert", "-v", action="store_true", help="Select texts that do not match")
    parser.add_argument("--count", "-n", action="store_true", help="Only print the number of selected texts")
    parser.add_argument("--json", "-oj", action="store_true", help="Output JSON with a result for every text")
    parser.add_argument("--legacy", action="store_true", help="Enable every RE_LEGACY_* behaviour")
    parser.add_argument("--legacy-paren-scan", action="store_true", help="Pair '(' with the rightmost unescaped ')'")
    parser.add_argument("--legacy-group-offset", action="store_true", help="Evaluate groups from the start of the input")
    parser.add_argument("--legacy-star-offset", action="store_true", help="Use token positions as '*' loop offsets")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def flags_from_args(args: argparse.Namespace) -> int:
    flags = RE_LEGACY if args.legacy else 0
    if args.legacy_paren_scan:
        flags |= RE_LEGACY_PAREN_SCAN
    if args.legacy_group_offset:
        flags |= RE_LEGACY_GROUP_OFFSET
    if args.legacy_star_offset:
        flags |= RE_LEGACY_STAR_OFFSET
    return flags


def read_texts(args: argparse.Namespace) -> List[str]:
    if args.texts:
        return list(args.texts)
    if args.input_file:
        with open(args.input_file, 'r', encoding='utf-8') as f:
            return [line.rstrip('\n') for line in f]
    return [line.rstrip('\n') for line in sys.stdin]


def render(expr: Regexp, texts: List[str], invert: bool = False, count: bool = False, json_mode: bool = False):
    """
    Match every text and build the output lines.

    Returns:
        tuple: (list of output lines, number of selected texts)
    """
    results = [(text, expr.is_full_match(text)) for text in texts]
    selected = [text for text, matched in results if matched != invert]

    if json_mode:
        document = {
            "pattern": expr.pattern,
            "flags": expr.flags,
            "results": [{"text": text, "matched": matched} for text, matched in results],
        }
        return [json.dumps(document, indent=2)], len(selected)
    if count:
        return [str(len(selected))], len(selected)
    return selected, len(selected)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    flags = flags_from_args(args)
    try:
        expr = Regexp.compile(args.pattern, flags)
    except PatternSyntaxError as e:
        print(f"Error: invalid pattern {args.pattern!r}: {e}", file=sys.stderr)
        return EXIT_SYNTAX_ERROR

    lines, selected = render(expr, read_texts(args), args.invert, args.count, args.json)

    if args.output_file:
        with open(args.output_file, 'w', encoding='utf-8') as f:
            f.writelines(line + "\n" for line in lines)
    else:
        for line in lines:
            print(line)
    return EXIT_MATCH if selected else EXIT_NO_MATCH


if __name__ == "__main__":
    sys.exit(main())
