"""
Path pattern parser.

Compiles `fnmatch` style patterns to token chains for the matching engine.

Licensed under MIT
Copyright (c) 2018 - 2020 Isaac Muse <isaacmuse@gmail.com>

Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
documentation files (the "Software"), to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
and to permit persons to whom the Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all copies or substantial portions
of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED
TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF
CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
IN THE SOFTWARE.
"""
import functools
import bracex
from . import _platform
from ._lpmatch import (
    CompiledPattern, Dummy, Literal, AnyChar, CharClass, Wildcard, UNMATCHABLE, is_separator
)
from ._span import STAR, QMARK

PATTERN_LIMIT = 1000

# Flags
CASE = 0x0001
IGNORECASE = 0x0002
GLOBSTAR = 0x0100
BRACE = 0x0200
FORCEWIN = _platform.FORCEWIN
FORCEUNIX = _platform.FORCEUNIX

FLAG_MASK = (
    CASE |
    IGNORECASE |
    GLOBSTAR |
    BRACE |
    FORCEWIN |
    FORCEUNIX
)
CASE_FLAGS = IGNORECASE | CASE

LBRACKET = ord('[')
RBRACKET = ord(']')

# `bracex` works on text; Latin-1 maps every byte to one character and back
_BRACE_CODEC = 'latin-1'


class PatternLimitException(Exception):
    """Pattern limit exception."""


def get_case(flags):
    """Parse flags for case sensitivity settings."""

    if not bool(flags & CASE_FLAGS):
        case_sensitive = _platform.get_rules(flags).case_sensitive
    elif flags & CASE:
        case_sensitive = True
    else:
        case_sensitive = False
    return case_sensitive


def expand_braces(pattern, flags):
    """
    Expand braces in a single pattern.

    Patterns have no escape character, so every `\\` is doubled before `bracex`
    sees it and comes back as a literal backslash.
    """

    if flags & BRACE:
        p = pattern.decode(_BRACE_CODEC).replace('\\', '\\\\')
        for expanded in bracex.iexpand(p, keep_escapes=False, limit=0):
            yield expanded.encode(_BRACE_CODEC)
    else:
        yield pattern


def expand(patterns, flags, limit=PATTERN_LIMIT):
    """Expand patterns, dropping duplicates and enforcing the limit on each pattern's expansions."""

    seen = set()
    expanded = []
    for p in ([patterns] if isinstance(patterns, bytes) else patterns):
        for count, pattern in enumerate(expand_braces(p, flags), 1):
            if 0 < limit < count:
                raise PatternLimitException("Pattern limit exceeded the limit of {:d}".format(limit))
            if pattern not in seen:
                seen.add(pattern)
                expanded.append(pattern)
    return expanded


class LpParse(object):
    """Parse a pattern into a token chain."""

    def __init__(self, pattern, glob=False, case_sensitive=True):
        """Initialize."""

        self.pattern = pattern
        self.glob = glob
        self.case_sensitive = case_sensitive

    def is_strong(self, i):
        """
        Check if the `*` at `i` is a `**` that may cross separators.

        Only in glob mode, and only when it starts a component and either ends
        the pattern or is followed by `*` and a separator.
        """

        pattern = self.pattern
        length = len(pattern)
        if not self.glob:
            return False
        if i != 0 and not is_separator(self.case_sensitive, pattern[i - 1]):
            return False
        return i + 1 >= length or (
            i + 2 < length and pattern[i + 1] == STAR and is_separator(self.case_sensitive, pattern[i + 2])
        )

    def parse(self):
        """Parse pattern."""

        pattern = self.pattern
        length = len(pattern)
        if not length:
            return UNMATCHABLE

        head = current = Dummy()
        start = 0

        def literal(end):
            """Add the literal text gathered before `end`."""

            nonlocal current
            if end - start > 0:
                current.next = Literal(pattern[start:end])
                current = current.next

        i = 0
        while i < length:
            c = pattern[i]
            if c == LBRACKET:
                end = pattern.find(b']', i)
                # `[]` is literal text
                if end != -1 and end - i > 1:
                    literal(i)
                    current.next = CharClass(pattern[i + 1:end])
                    current = current.next
                    start = end + 1
                    i = end
            elif c == QMARK:
                literal(i)
                current.next = AnyChar()
                current = current.next
                start = i + 1
            elif c == STAR:
                literal(i)
                strong = self.is_strong(i)
                current.next = Wildcard(self.glob, strong)
                current = current.next
                start = i + 1
                if strong:
                    start += 2
                    i += 2
            i += 1

        if start < length:
            current.next = Literal(pattern[start:])

        return CompiledPattern(head, self.case_sensitive)


def compile(patterns, flags, limit=PATTERN_LIMIT):  # noqa A001
    """Compile byte patterns under the flags."""

    glob = bool(flags & GLOBSTAR)
    case_sensitive = get_case(flags)
    return tuple(_compile(p, glob, case_sensitive) for p in expand(patterns, flags, limit))


@functools.lru_cache(maxsize=256, typed=True)
def _compile(pattern, glob, case_sensitive):
    """Compile a single pattern."""

    return LpParse(pattern, glob, case_sensitive).parse()
