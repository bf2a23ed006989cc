"""
Path string operations.

Paths are only ever treated as strings here: nothing is looked up on the file
system except by `abs` and `rel`, which ask a `PathHandler`. Every function
accepts `str`, `bytes` or path-like arguments and returns the same type.

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
from __future__ import annotations
from collections import namedtuple
from typing import Any, Optional, Tuple
from . import _canon
from . import _handler
from . import _platform
from . import util
from .fnmatch import match
from .types import Paths, Strings
from ._span import ByteSpan, DOT_SPAN

__all__ = (
    "FORCEWIN", "FORCEUNIX", "W", "U",
    "concat", "path", "canonicalize", "drive", "root", "anchor", "is_absolute",
    "parent", "name", "stem", "suffix", "suffixes", "parts", "match",
    "abs", "rel", "info", "PathInfo"
)

W = FORCEWIN = _platform.FORCEWIN
U = FORCEUNIX = _platform.FORCEUNIX

FLAG_MASK = FORCEWIN | FORCEUNIX


class PathInfo(namedtuple('PathInfo', ['platform', 'sep', 'pathsep', 'devnull'])):
    """Path conventions of a platform."""


def _prepare(paths: Tuple[Paths, ...], flags: int) -> Tuple[_platform.PlatformRules, Tuple[ByteSpan, ...], bool]:
    """Select the rules and convert the arguments to spans."""

    is_bytes = util.is_bytes_args(paths)
    rules = _platform.get_rules(flags & FLAG_MASK)
    return rules, tuple(ByteSpan(util.encode(p)) for p in paths), is_bytes


def _result(span: ByteSpan, is_bytes: bool) -> Strings:
    """Convert a span back to the caller's type."""

    return util.decode(span.tobytes(), is_bytes)


def concat(*paths: Paths, flags: int = 0) -> Strings:
    """
    Concatenate paths without canonicalizing them.

    Separators are normalized and collapsed, and an absolute argument drops
    everything before it. No arguments give `.`.
    """

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(rules.concat(spans), is_bytes)


def path(*paths: Paths, flags: int = 0) -> Strings:
    """
    Concatenate and canonicalize paths.

    `.` components are dropped and `..` removes the component before it, but
    never climbs above an anchor. A trailing separator is kept.
    """

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(_canon.canonicalize(rules, spans), is_bytes)


canonicalize = path


def drive(*paths: Paths, flags: int = 0) -> Strings:
    """Get the drive (always empty on POSIX)."""

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(rules.drive(spans), is_bytes)


def root(*paths: Paths, flags: int = 0) -> Strings:
    """Get the root."""

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(rules.root(spans), is_bytes)


def anchor(*paths: Paths, flags: int = 0) -> Strings:
    """Get the drive followed by the root."""

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(rules.anchor(spans), is_bytes)


def is_absolute(*paths: Paths, flags: int = 0) -> bool:
    """Check if the concatenated path is absolute."""

    rules, spans, _ = _prepare(paths, flags)
    return rules.is_absolute(rules.concat(spans))


def parent(*paths: Paths, flags: int = 0) -> Strings:
    """
    Get the parent.

    The parent of an anchor is the anchor itself, and a relative path keeps
    climbing with `..`.
    """

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(_canon.parent(rules, spans), is_bytes)


def name(*paths: Paths, flags: int = 0) -> Strings:
    """Get the last component."""

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(_canon.name(rules, spans), is_bytes)


def stem(*paths: Paths, flags: int = 0) -> Strings:
    """Get the last component without its suffix."""

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(_canon.stem(rules, spans), is_bytes)


def suffix(*paths: Paths, flags: int = 0) -> Strings:
    """Get the suffix of the last component; a leading dot does not start one."""

    rules, spans, is_bytes = _prepare(paths, flags)
    return _result(_canon.suffix(rules, spans), is_bytes)


def suffixes(*paths: Paths, flags: int = 0) -> Tuple[Strings, ...]:
    """
    Get all suffixes of the last component.

    The suffixes are computed eagerly and returned as a tuple, so the result can be iterated any number of times.
    """

    rules, spans, is_bytes = _prepare(paths, flags)
    return tuple(_result(s, is_bytes) for s in _canon.suffixes(rules, spans))


def parts(*paths: Paths, index: Optional[int] = None, flags: int = 0) -> Any:
    """
    Get the anchor followed by the components.

    With an `index`, return a single part instead: indexes are 1 based, negative
    ones count from the end, and `0` or out of range indexes give `None`.
    """

    if index is not None and (not isinstance(index, int) or isinstance(index, bool)):
        raise TypeError("Index must be an integer, not {}".format(type(index)))

    rules, spans, is_bytes = _prepare(paths, flags)
    components = _canon.parts(rules, spans)
    if index is None:
        return tuple(_result(c, is_bytes) for c in components)

    if index == 0:
        return None
    index = len(components) + index if index < 0 else index - 1
    if not 0 <= index < len(components):
        return None
    return _result(components[index], is_bytes)


def abs(  # noqa: A001
    *paths: Paths,
    flags: int = 0,
    handler: Optional[_handler.PathHandler] = None
) -> Strings:
    """
    Concatenate the paths and make the result absolute with the handler.

    A trailing separator on the input is kept.
    """

    rules, spans, is_bytes = _prepare(paths, flags)
    fs = rules.concat(spans)
    resolved = util.encode(_handler.resolve('abs', handler, _result(rules.unescape(fs), is_bytes)))

    if rules.is_separator(fs.last()) and not resolved.endswith(bytes((rules.sep,))):
        resolved += bytes((rules.sep,))
    return util.decode(rules.escape(fs, resolved), is_bytes)


def rel(
    path: Paths,
    base: Optional[Paths] = None,
    *,
    flags: int = 0,
    handler: Optional[_handler.PathHandler] = None
) -> Strings:
    """
    Get `path` relative to `base`, or to the working directory.

    When the two resolve to different drives, the canonical `path` is returned.
    """

    args = (path,) if base is None else (path, base)
    rules, spans, is_bytes = _prepare(args, flags)
    fs = spans[0]

    target = ByteSpan(util.encode(_handler.resolve('rel', handler, _result(rules.unescape(fs), is_bytes))))
    if base is None:
        cwd = _handler.working_directory('rel', handler)
    else:
        cwd = _handler.resolve('rel', handler, _result(rules.unescape(spans[1]), is_bytes))
    start = ByteSpan(util.encode(cwd))

    if rules.drive((target,)) != rules.drive((start,)):
        return _result(_canon.canonicalize(rules, (fs,)), is_bytes)

    relative = _canon.relative(rules, start, target)
    if rules.is_separator(fs.last()) and relative.last() != rules.sep and not relative.ends_with_dots():
        relative = relative.add_sep(rules.sep)
    if not relative or rules.is_absolute(relative):
        return _result(DOT_SPAN, is_bytes)
    return _result(relative, is_bytes)


def info(*, flags: int = 0) -> PathInfo:
    """Get the separator, list separator and null device of the platform."""

    rules = _platform.get_rules(flags & FLAG_MASK)
    return PathInfo(
        rules.name,
        chr(rules.sep),
        rules.pathsep.decode('ascii'),
        rules.devnull.decode('ascii')
    )
