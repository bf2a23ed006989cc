# noqa: A005
"""
Path pattern matching.

`fnmatch` style matching with the legacy `lpath` rules.
"""
from __future__ import annotations
from . import _lpparse
from . import _canon
from . import _platform
from . import util
from ._span import ByteSpan
import copyreg
from typing import AnyStr, Iterable, Sequence

__all__ = (
    "CASE", "IGNORECASE", "BRACE", "GLOBSTAR", "FORCEWIN", "FORCEUNIX",
    "C", "I", "B", "G", "W", "U",
    "fnmatch", "globmatch", "filter", "compile", "match",
    "LpMatcher"
)

C = CASE = _lpparse.CASE
I = IGNORECASE = _lpparse.IGNORECASE
B = BRACE = _lpparse.BRACE
G = GLOBSTAR = _lpparse.GLOBSTAR
W = FORCEWIN = _lpparse.FORCEWIN
U = FORCEUNIX = _lpparse.FORCEUNIX

FLAG_MASK = (
    CASE |
    IGNORECASE |
    BRACE |
    GLOBSTAR |
    FORCEWIN |
    FORCEUNIX
)


class LpMatcher(util.Immutable):
    """Pre-compiled matcher object."""

    __slots__ = ("_patterns", "_flags", "_limit", "_compiled", "_is_bytes")

    def __init__(self, patterns: AnyStr | Sequence[AnyStr], flags: int = 0, limit: int = _lpparse.PATTERN_LIMIT):
        """Initialize."""

        patterns = util.to_tuple(patterns)
        super(LpMatcher, self).__init__(
            _patterns=patterns,
            _flags=flags,
            _limit=limit,
            _compiled=_lpparse.compile(tuple(util.encode(p) for p in patterns), flags, limit),
            _is_bytes=util.is_bytes_args(patterns)
        )

    def __len__(self) -> int:
        """Number of compiled patterns after expansion."""

        return len(self._compiled)

    def __eq__(self, other: object) -> bool:
        """Equal."""

        return (
            isinstance(other, LpMatcher) and
            self._patterns == other._patterns and
            self._flags == other._flags and
            self._limit == other._limit
        )

    def __ne__(self, other: object) -> bool:
        """Not equal."""

        return not self.__eq__(other)

    def __hash__(self) -> int:
        """Hash."""

        return hash((type(self), self._patterns, self._flags, self._limit))

    def match(self, filename: AnyStr) -> bool:
        """Match filename."""

        if self._patterns and util.is_bytes_args((filename,)) != self._is_bytes:
            raise TypeError("Filename and patterns should be of the same type")
        name = util.encode(filename)
        return any(p.match(name) for p in self._compiled)

    def filter(self, filenames: Iterable[AnyStr]) -> list[AnyStr]:
        """Filter names using the patterns."""

        return [f for f in filenames if self.match(f)]


copyreg.pickle(LpMatcher, lambda p: (LpMatcher, (p._patterns, p._flags, p._limit)))


def _flag_transform(flags: int) -> int:
    """Transform flags to matcher defaults."""

    # Enabling both cancels out
    if flags & FORCEUNIX and flags & FORCEWIN:
        flags ^= FORCEWIN | FORCEUNIX

    return (flags & FLAG_MASK)


def compile(  # noqa: A001
    patterns: AnyStr | Sequence[AnyStr],
    flags: int = 0,
    limit: int = _lpparse.PATTERN_LIMIT
) -> LpMatcher:
    """Pre-compile a matcher object."""

    return LpMatcher(patterns, _flag_transform(flags), limit)


def fnmatch(
    filename: AnyStr,
    patterns: AnyStr | Sequence[AnyStr],
    *,
    flags: int = 0,
    limit: int = _lpparse.PATTERN_LIMIT
) -> bool:
    """
    Check if filename matches pattern.

    The whole name is matched at once, so `*` and `?` also match separators.
    By default case sensitivity follows the platform, but `CASE` or
    `IGNORECASE` take precedence.
    """

    return compile(patterns, flags, limit).match(filename)


def globmatch(
    filename: AnyStr,
    patterns: AnyStr | Sequence[AnyStr],
    *,
    flags: int = 0,
    limit: int = _lpparse.PATTERN_LIMIT
) -> bool:
    """
    Check if filename matches pattern in glob mode.

    A plain `*` stops at a separator, while a `**` component crosses any number of them.
    """

    return compile(patterns, flags | GLOBSTAR, limit).match(filename)


def filter(  # noqa A001
    filenames: Iterable[AnyStr],
    patterns: AnyStr | Sequence[AnyStr],
    *,
    flags: int = 0,
    limit: int = _lpparse.PATTERN_LIMIT
) -> list[AnyStr]:
    """Filter names using pattern."""

    return compile(patterns, flags, limit).filter(filenames)


def match(candidate: AnyStr, pattern: AnyStr, *, flags: int = 0) -> AnyStr | None:
    """
    Match a path against a pattern component by component, from the right.

    Returns the candidate on success and `None` otherwise. A relative pattern
    matches the tail of the candidate, an absolute one must match the whole
    path including the drive. An empty pattern matches any non-empty candidate.
    """

    util.is_bytes_args((candidate, pattern))
    flags = _flag_transform(flags)
    rules = _platform.get_rules(flags)
    case_sensitive = _lpparse.get_case(flags)

    name = ByteSpan(util.encode(candidate))
    pat = ByteSpan(util.encode(pattern))
    if not name:
        return None
    if not pat:
        return util.fscodec(candidate)

    pattern_parts = _canon.canon_split(rules, rules.anchor((pat,)), pat, False, False)
    name_parts = _canon.canon_split(rules, rules.anchor((name,)), name, False, False)

    if rules.is_absolute(pat):
        if not rules.is_absolute(name):
            return None
        if rules.drive((pat,)) != rules.drive((name,)):
            return None
        if len(pattern_parts) != len(name_parts):
            return None
    else:
        if len(name_parts) < len(pattern_parts):
            return None
        if not pattern_parts and name_parts:
            return None
        if pattern_parts and pattern_parts[0].is_double_dot() and len(name_parts) != len(pattern_parts):
            return None

    for p, n in zip(reversed(pattern_parts), reversed(name_parts)):
        if not _lpparse._compile(p.tobytes(), False, case_sensitive).match(n):
            return None
    return util.fscodec(candidate)
