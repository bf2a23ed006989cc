"""
Byte spans.

Every path operation works on immutable views over byte buffers instead of slicing.
A `ByteSpan` may alias a caller's buffer; a `ByteBuilder` produces a fresh one.
"""
from . import util

SLASH = ord('/')
BSLASH = ord('\\')
DOT = ord('.')
COLON = ord(':')
STAR = ord('*')
QMARK = ord('?')
SPACE = ord(' ')


def to_upper(c):
    """Uppercase an ASCII letter."""

    return c - 32 if 0x61 <= c <= 0x7a else c


def is_letter(c):
    """Check for an ASCII letter."""

    return 0x41 <= c <= 0x5a or 0x61 <= c <= 0x7a


def can_upper(c):
    """Check for a lowercase ASCII letter."""

    return 0x61 <= c <= 0x7a


def fold(c):
    """Fold a byte for case insensitive comparison (`\\` is treated as `/`)."""

    return SLASH if c == BSLASH else to_upper(c)


class ByteSpan(util.Immutable):
    """Read-only `(buffer, offset, length)` view."""

    __slots__ = ('buffer', 'offset', 'length')

    def __init__(self, buffer=b'', offset=0, length=None):
        """Initialize."""

        if isinstance(buffer, (bytearray, memoryview)):
            buffer = bytes(buffer)
        if length is None:
            length = len(buffer) - offset
        super(ByteSpan, self).__init__(buffer=buffer, offset=offset, length=length)

    def __len__(self):
        """Length."""

        return self.length

    def __bool__(self):
        """Empty spans are false."""

        return self.length > 0

    def __getitem__(self, index):
        """Get the byte at `index`."""

        if index < 0:
            index += self.length
        if not 0 <= index < self.length:
            raise IndexError('span index out of range')
        return self.buffer[self.offset + index]

    def __iter__(self):
        """Iterate bytes."""

        return iter(self.tobytes())

    def __bytes__(self):
        """Bytes."""

        return self.tobytes()

    def __eq__(self, other):
        """Compare bytes."""

        if isinstance(other, ByteSpan):
            return self.length == other.length and self.tobytes() == other.tobytes()
        if isinstance(other, (bytes, bytearray)):
            return self.tobytes() == other
        return NotImplemented

    def __ne__(self, other):
        """Not equal."""

        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        """Hash."""

        return hash(self.tobytes())

    def __repr__(self):
        """Representation."""

        return 'ByteSpan({!r})'.format(self.tobytes())

    def tobytes(self):
        """Copy out the viewed bytes."""

        if self.offset == 0 and self.length == len(self.buffer):
            return self.buffer
        return self.buffer[self.offset:self.offset + self.length]

    def equals(self, other, case_sensitive=True):
        """
        Compare against another span.

        When not case sensitive, ASCII letters are folded and `/` is equal to `\\`.
        """

        if case_sensitive:
            return self == other
        if self.length != len(other):
            return False
        a = self.tobytes()
        b = bytes(other)
        for i in range(self.length):
            if fold(a[i]) != fold(b[i]):
                return False
        return True

    def first(self):
        """First byte or 0."""

        return self.buffer[self.offset] if self.length else 0

    def second(self):
        """Second byte or 0."""

        return self.buffer[self.offset + 1] if self.length > 1 else 0

    def last(self, index=0):
        """Byte `index` positions before the end, or 0."""

        if self.length <= index:
            return 0
        return self.buffer[self.offset + self.length - (index + 1)]

    def is_dot(self):
        """Check for `.`."""

        return self.length == 1 and self.buffer[self.offset] == DOT

    def is_double_dot(self):
        """Check for `..`."""

        return self.length == 2 and self.buffer[self.offset] == DOT and self.buffer[self.offset + 1] == DOT

    def ends_with_dot(self):
        """Check if the last byte is `.`."""

        return self.length > 0 and self.last() == DOT

    def ends_with_dots(self):
        """Check if the span ends in `..`."""

        return self.length > 1 and self.last() == DOT and self.last(1) == DOT

    def starts_with(self, other):
        """Check for a byte-exact prefix."""

        other = bytes(other)
        if len(other) > self.length:
            return False
        return self.buffer[self.offset:self.offset + len(other)] == other

    def starts_with_unc_escape(self):
        """Check for the `\\\\?\\` prefix written with either separator (but only one kind)."""

        if self.length <= 3:
            return False
        b1 = self.buffer[self.offset]
        return (
            (b1 == BSLASH or b1 == SLASH) and
            self.buffer[self.offset + 1] == b1 and
            self.buffer[self.offset + 2] == QMARK and
            self.buffer[self.offset + 3] == b1
        )

    def starts_with_drive_letter(self):
        """Check for `X:`."""

        if self.length < 2:
            return False
        return self.buffer[self.offset + 1] == COLON and is_letter(self.buffer[self.offset])

    def sub(self, start, length=None):
        """Sub-span sharing the buffer; `start` is clamped to `[0, length]`."""

        if start < 0:
            start = 0
        if start > self.length:
            start = self.length
        end = self.length if length is None else min(self.length, start + length)
        if start == 0 and end == self.length:
            return self
        if start == end:
            return EMPTY
        return ByteSpan(self.buffer, self.offset + start, end - start)

    def cat(self, other):
        """Concatenate, reusing either side when the other is empty."""

        if not self.length:
            return other
        if not other.length:
            return self
        return ByteSpan(self.tobytes() + other.tobytes())

    def add_sep(self, sep):
        """Copy with a trailing separator."""

        return ByteSpan(self.tobytes() + bytes((sep,)))


EMPTY = ByteSpan(b'')
DOT_SPAN = ByteSpan(b'.')
DOUBLE_DOT = ByteSpan(b'..')
BACK_SLASH = ByteSpan(b'\\')
UNC_ESCAPE = ByteSpan(b'\\\\?\\')


class ByteBuilder(object):
    """
    Growable output buffer.

    `to_span` hands the buffer over to the returned span, after which the builder cannot be used.
    """

    def __init__(self):
        """Initialize."""

        self._buffer = bytearray()

    def _check(self):
        """Ensure the builder was not consumed."""

        if self._buffer is None:
            raise ValueError('Builder has already been consumed')
        return self._buffer

    @property
    def pos(self):
        """Current length."""

        return len(self._check())

    def is_empty(self):
        """Check if nothing was written."""

        return not self._check()

    def append(self, value):
        """Append a byte, bytes, or a span."""

        buf = self._check()
        if isinstance(value, int):
            buf.append(value)
        elif isinstance(value, ByteSpan):
            buf += value.buffer[value.offset:value.offset + value.length]
        else:
            buf += value
        return self

    def get_last(self, index=0):
        """Byte `index` positions before the end."""

        buf = self._check()
        if index < 0:
            raise ValueError('Index must not be negative')
        return buf[len(buf) - index - 1]

    def set_pos(self, pos):
        """Truncate to `pos`; growing is ignored."""

        buf = self._check()
        if pos < len(buf):
            del buf[pos:]

    def to_span(self):
        """Finish building."""

        buf = self._check()
        self._buffer = None
        return ByteSpan(bytes(buf)) if buf else EMPTY
