"""
Pattern matching engine.

A compiled pattern is a singly linked chain of tokens. Matching walks the chain
with a `MatcherState` that is created for every call, so compiled chains can be
shared and cached.

Wildcards extend shortest first. When a wildcard nested inside another one runs
out of input, it flags the whole match as failed so that the outer wildcards do
not retry every split of the input.
"""
from ._span import SLASH, BSLASH, STAR, fold

TABLE_SIZE = 256


def is_separator(case_sensitive, c):
    """Pattern separator: only `/` when case sensitive, `/` or `\\` otherwise."""

    if case_sensitive:
        return c == SLASH
    return c == SLASH or c == BSLASH


class MatcherState(object):
    """Per-call matching state."""

    __slots__ = ('string', 'length', 'idx', 'case_sensitive', 'cwk', 'done', 'fail')

    def __init__(self, string, case_sensitive):
        """Initialize."""

        self.string = string
        self.length = len(string)
        self.idx = 0
        self.case_sensitive = case_sensitive
        # Currently active wildcard
        self.cwk = None
        self.done = False
        self.fail = False

    def remaining(self):
        """Bytes left after the cursor."""

        return self.length - self.idx


def proceed(state, token):
    """Run the chain from `token`; succeed only if all input is consumed."""

    while token is not None and not state.done:
        if not token.match(state):
            return False
        if state.fail:
            return False
        token = token.next
    return state.idx == state.length and not state.fail


class Token(object):
    """Chain node."""

    __slots__ = ('next',)

    def __init__(self):
        """Initialize."""

        self.next = None

    def match(self, state):
        """Try to match at the cursor and advance it."""

        raise NotImplementedError

    def __repr__(self):
        """Representation of the chain from here."""

        name = self.__class__.__name__
        return name if self.next is None else '{} -> {!r}'.format(name, self.next)


class Dummy(Token):
    """Chain head, matches nothing and always succeeds."""

    __slots__ = tuple()

    def match(self, state):
        """Always succeed."""

        return True


class Unmatchable(Token):
    """Body of the empty pattern."""

    __slots__ = tuple()

    def match(self, state):
        """Always fail."""

        return False


class Literal(Token):
    """Exact run of bytes."""

    __slots__ = ('value',)

    def __init__(self, value):
        """Initialize."""

        super(Literal, self).__init__()
        self.value = value

    def match(self, state):
        """Compare the run at the cursor."""

        size = len(self.value)
        if state.remaining() < size:
            return False

        start = state.idx
        string = state.string
        if state.case_sensitive:
            if string[start:start + size] != self.value:
                return False
        else:
            for i, c in enumerate(self.value):
                if fold(c) != fold(string[start + i]):
                    return False

        state.idx += size
        return True

    def __repr__(self):
        """Representation of the chain from here."""

        name = 'Literal({!r})'.format(self.value)
        return name if self.next is None else '{} -> {!r}'.format(name, self.next)


class AnyChar(Token):
    """Any single byte, including separators."""

    __slots__ = tuple()

    def match(self, state):
        """Consume one byte."""

        if state.remaining() < 1:
            return False
        state.idx += 1
        return True


class CharClass(Token):
    """
    Bracketed byte class.

    A leading `!` negates the class. `X-Y` accepts the two bytes following `X`
    (wrapping at 255) and ignores `Y`, so `[a-z]` accepts `a`, `b`, and `c`.
    """

    __slots__ = ('accepted',)

    def __init__(self, body):
        """Initialize."""

        super(CharClass, self).__init__()
        accepted = [False] * TABLE_SIZE
        negate = False
        prev = -1
        i = 0
        length = len(body)
        while i < length:
            c = body[i]
            if c == 0x21 and i == 0:
                negate = True
            elif c == 0x2d and prev != -1 and i + 1 < length:
                i += 1
                accepted[(prev + 1) & 0xff] = True
                accepted[(prev + 2) & 0xff] = True
                prev = -1
            else:
                accepted[c] = True
                prev = c
            i += 1

        if negate:
            accepted = [not a for a in accepted]
        self.accepted = tuple(accepted)

    def match(self, state):
        """Consume one accepted byte."""

        if state.remaining() < 1:
            return False
        if not self.accepted[state.string[state.idx]]:
            return False
        state.idx += 1
        return True


class Wildcard(Token):
    """
    Variable length run.

    In glob mode a plain wildcard stops at a separator, consuming it. A double
    wildcard (`**`) crosses any number of separators.
    """

    __slots__ = ('glob', 'is_double')

    def __init__(self, glob, is_double):
        """Initialize."""

        super(Wildcard, self).__init__()
        self.glob = glob
        self.is_double = is_double

    def match(self, state):
        """Extend until the rest of the chain matches."""

        if state.remaining() < 1:
            return True

        string = state.string
        # A literal `*` in the input is eaten by the wildcard alone
        if string[state.idx] == STAR:
            state.idx += 1
            return True

        prev = state.cwk
        start = state.idx
        while True:
            remaining = state.remaining()
            if remaining > 0:
                c = string[state.idx]
                if c == STAR:
                    if prev is not None:
                        state.fail = True
                    return False

                if self.glob and not self.is_double and is_separator(state.case_sensitive, c):
                    state.idx += 1
                    state.cwk = prev
                    return True

            state.cwk = self
            if proceed(state, self.next):
                state.done = True
                return True

            if remaining < 1 or state.fail:
                if prev is not None:
                    state.fail = True
                return False

            start += 1
            state.idx = start


class CompiledPattern(object):
    """Compiled pattern chain."""

    __slots__ = ('head', 'case_sensitive')

    def __init__(self, head, case_sensitive):
        """Initialize."""

        self.head = head
        self.case_sensitive = case_sensitive

    def match(self, candidate):
        """
        Match the whole candidate.

        An empty candidate matches every pattern.
        """

        candidate = bytes(candidate)
        if not candidate:
            return True
        return proceed(MatcherState(candidate, self.case_sensitive), self.head)

    def __repr__(self):
        """Representation."""

        return 'CompiledPattern({!r})'.format(self.head)


# Compiled form of the empty pattern
UNMATCHABLE = CompiledPattern(Unmatchable(), False)
