"""Compatibility module."""
import sys
import os
import typing
from . import types

# Text paths are carried through the core as UTF-8 bytes.
ENCODING = 'utf-8'
ERRORS = 'surrogateescape'

if sys.platform.startswith('win'):
    _PLATFORM = "windows"
elif sys.platform == "darwin":  # pragma: no cover
    _PLATFORM = "osx"
else:
    _PLATFORM = "linux"


def platform() -> str:
    """Get platform."""

    return _PLATFORM


def to_tuple(values):
    """Combine values."""

    return (values,) if isinstance(values, (str, bytes)) else tuple(values)


def fscodec(path: types.Paths) -> types.Strings:
    """
    Provide common interface when using to translate path-like files.

    `os.PathLike` objects are reduced to the string or bytes they wrap.
    """

    if not isinstance(path, (str, bytes)):
        path = os.fspath(path)
    return path


def is_bytes_args(args: typing.Sequence[types.Paths]) -> bool:
    """
    Check that all arguments are the same string type and report whether they are bytes.

    No arguments are treated as text.
    """

    values = [fscodec(a) for a in args]
    if not values:
        return False
    is_bytes = isinstance(values[0], bytes)
    for value in values[1:]:
        if isinstance(value, bytes) != is_bytes:
            raise TypeError(
                "Paths should all be of the same type, not {} and {}".format(type(values[0]), type(value))
            )
    return is_bytes


def encode(path: types.Paths) -> bytes:
    """Get the byte representation of a path argument."""

    path = fscodec(path)
    return path if isinstance(path, bytes) else path.encode(ENCODING, ERRORS)


def decode(value: bytes, is_bytes: bool) -> types.Strings:
    """Convert result bytes back to the caller's string type."""

    return value if is_bytes else value.decode(ENCODING, ERRORS)


class Immutable(object):
    """Immutable."""

    __slots__: typing.Tuple[typing.Any, ...] = tuple()

    def __init__(self, **kwargs: typing.Any) -> None:
        """Initialize."""

        for k, v in kwargs.items():
            super(Immutable, self).__setattr__(k, v)

    def __setattr__(self, name: str, value: typing.Any) -> None:  # pragma: no cover
        """Prevent mutability."""

        raise AttributeError('Class is immutable!')
