"""
Platform path rules.

POSIX and Windows differ in separators, case sensitivity, and in how a path is anchored.
Both rule sets are stateless; one instance of each is shared and picked per call from the flags.
"""
from . import util
from ._span import (
    ByteSpan, ByteBuilder, EMPTY, DOT_SPAN, BACK_SLASH, UNC_ESCAPE,
    SLASH, BSLASH, COLON, SPACE, to_upper, is_letter, can_upper
)

FORCEWIN = 0x10000
FORCEUNIX = 0x20000

_SLASH_ROOT = ByteSpan(b'/')
_DOUBLE_SLASH_ROOT = ByteSpan(b'//')


class PlatformRules(object):
    """Path rules shared by all platforms."""

    name = ''
    sep = SLASH
    pathsep = b':'
    devnull = b'/dev/null'
    case_sensitive = True

    def is_separator(self, c):
        """Check if byte is a path separator."""

        return c == SLASH

    def is_absolute(self, path):
        """Check if the path is absolute."""

        return path.length > 0 and self.is_separator(path.first())

    def drive(self, args):
        """Get the drive of the right most argument that has one."""

        return EMPTY

    def root(self, args):
        """Get the root of the right most argument that has one."""

        return EMPTY

    def anchor(self, args):
        """Get drive and root."""

        return self.drive(args).cat(self.root(args))

    def _start_index(self, args):
        """Index of the argument that concatenation starts from."""

        start = 0
        for i, arg in enumerate(args):
            if self.is_absolute(arg):
                start = i
        return start

    def _needs_separator(self, last):
        """Check if a separator is needed after the byte `last` when joining arguments."""

        return not self.is_separator(last)

    def _prefix_length(self, arg):
        """Length of a prefix to drop from arguments after the start argument."""

        return 0

    def _normalize(self, args, result):
        """Normalize a concatenated result."""

        return result

    def concat(self, args):
        """
        Concatenate path arguments.

        An absolute argument discards everything before it. Separators are normalized
        and collapsed, except that a leading double separator is kept once.
        """

        start = self._start_index(args)
        builder = ByteBuilder()
        for x in range(start, len(args)):
            arg = args[x]
            if not builder.is_empty() and self._needs_separator(builder.get_last()):
                builder.append(self.sep)

            if not arg:
                continue

            data = arg.tobytes()
            length = len(data)
            skip_sep = False
            for i in range(self._prefix_length(arg) if x > start else 0, length):
                c = data[i]
                if self.is_separator(c):
                    c = self.sep
                    if skip_sep:
                        continue
                    if not builder.is_empty() and self.is_separator(builder.get_last()):
                        if builder.pos == 1:
                            # Keep a leading `//`, but `///` collapses to `/`
                            if i + 1 >= length or not self.is_separator(data[i + 1]):
                                builder.append(c)
                                continue
                            skip_sep = True
                        continue
                skip_sep = False
                builder.append(c)

        if builder.is_empty():
            return DOT_SPAN
        return self._normalize(args, builder.to_span())

    def no_suffix(self, name):
        """Check if a file name can never have a suffix."""

        return False

    def breaks_suffix(self, c):
        """Check if a byte ends the backwards search for a suffix."""

        return False

    def fix_drive_case(self, path):
        """Normalize the case of a leading drive."""

        return path

    def unescape(self, path):
        """Prepare a path for the resolving collaborator."""

        return path

    def escape(self, original, resolved):
        """Restore escapes of `original` on a resolved path."""

        return resolved


class PosixRules(PlatformRules):
    """POSIX rules: `/` only, case sensitive, no drives."""

    name = 'posix'

    def root(self, args):
        """
        Get the root.

        Exactly two leading slashes are a distinct root, any other amount is `/`.
        """

        for arg in reversed(args):
            if not arg:
                continue
            if arg.first() == SLASH:
                if arg.length == 1:
                    return _SLASH_ROOT
                if arg.second() == SLASH:
                    if arg.length == 2:
                        return _DOUBLE_SLASH_ROOT
                    if arg[2] == SLASH:
                        return _SLASH_ROOT
                    return _DOUBLE_SLASH_ROOT
                return _SLASH_ROOT
        return EMPTY

    def anchor(self, args):
        """Get the anchor, which is just the root."""

        return self.root(args)


class WindowsRules(PlatformRules):
    """Windows rules: `/` and `\\`, case insensitive, letter and UNC drives."""

    name = 'windows'
    sep = BSLASH
    pathsep = b';'
    devnull = b'null'
    case_sensitive = False

    def is_separator(self, c):
        """Check if byte is a path separator."""

        return c == SLASH or c == BSLASH

    def is_absolute(self, path):
        """Absolute if it starts with a separator or a drive letter."""

        if not path:
            return False
        if self.is_separator(path.first()):
            return True
        return path.starts_with_drive_letter()

    def _degraded(self, escaped):
        """Drive of a malformed UNC path."""

        return UNC_ESCAPE if escaped else EMPTY

    def _drive(self, arg):
        """Get the drive of a single argument, or `None` to keep looking further left."""

        escaped = False
        if arg.starts_with_unc_escape():
            arg = arg.sub(4)
            escaped = True

        if arg.starts_with_drive_letter():
            letter = bytes((to_upper(arg.first()), COLON))
            return ByteSpan((UNC_ESCAPE.tobytes() if escaped else b'') + letter)

        if not escaped:
            first = arg.first()
            if (first != BSLASH and first != SLASH) or arg.second() != first:
                return None
            arg = arg.sub(2)

        if escaped and not arg:
            return UNC_ESCAPE

        data = arg.tobytes()
        server_end = -1
        for j, c in enumerate(data):
            if c == BSLASH or c == SLASH:
                server_end = j
                break
        if server_end <= 0:
            return self._degraded(escaped)

        share_end = len(data)
        for j in range(server_end + 1, len(data)):
            c = data[j]
            if c == BSLASH or c == SLASH:
                if j == server_end + 1:
                    return self._degraded(escaped)
                share_end = j
                break

        share = data[server_end + 1:share_end]
        if escaped and not share:
            return UNC_ESCAPE

        prefix = UNC_ESCAPE.tobytes() if escaped else b'\\\\'
        unc = prefix + data[:server_end] + b'\\' + share
        return ByteSpan(bytes(to_upper(c) for c in unc))

    def drive(self, args):
        """
        Get the drive.

        Handles `X:`, `\\\\server\\share`, and the `\\\\?\\` escaped forms of both.
        Letters are uppercased. Malformed UNC paths give an empty drive, or the bare
        escape prefix when escaped.
        """

        for arg in reversed(args):
            if arg.length < 2:
                continue
            drive = self._drive(arg)
            if drive is not None:
                return drive
        return EMPTY

    def root(self, args):
        """Get the root, which is always `\\` or empty."""

        for arg in reversed(args):
            if not arg:
                continue
            if arg.starts_with_unc_escape():
                if arg.length == 4:
                    return EMPTY
                arg = arg.sub(4)
            b1 = arg.first()
            if b1 == BSLASH or b1 == SLASH:
                return BACK_SLASH
            if arg.length < 3:
                continue
            if is_letter(b1) and arg[1] == COLON:
                return BACK_SLASH if self.is_separator(arg[2]) else EMPTY
        return EMPTY

    def _start_index(self, args):
        """Restart at absolute arguments that have a root or switch the drive."""

        start = 0
        last_drive = EMPTY
        for i, arg in enumerate(args):
            if self.is_absolute(arg):
                drive = self.drive((arg,))
                if self.root((arg,)) or drive != last_drive:
                    start = i
                    last_drive = drive
        return start

    def _needs_separator(self, last):
        """Never add a separator right after a drive colon."""

        return not self.is_separator(last) and last != COLON

    def _prefix_length(self, arg):
        """Drop the drive of arguments that continue on the current drive."""

        return self.drive((arg,)).length

    def _normalize(self, args, result):
        """Rewrite the drive to its normalized form."""

        drive = self.drive(args)
        if not result.starts_with(drive):
            return drive.cat(result.sub(self.drive((result,)).length))
        return result

    def no_suffix(self, name):
        """A name ending in a dot has no suffix."""

        return name.ends_with_dot()

    def breaks_suffix(self, c):
        """File extensions cannot contain spaces."""

        return c == SPACE

    def fix_drive_case(self, path):
        """Uppercase a leading drive letter."""

        if path.second() == COLON and can_upper(path.first()):
            return ByteSpan(bytes((to_upper(path.first()),)) + path.sub(1).tobytes())
        return path

    def unescape(self, path):
        """Strip the `\\\\?\\` prefix which the resolver cannot handle."""

        data = path.tobytes()
        if data.startswith(UNC_ESCAPE.tobytes()):
            if len(data) >= 6 and data[5] == COLON:
                return path.sub(4)
            return path.sub(3)
        return path

    def escape(self, original, resolved):
        """Put the `\\\\?\\` prefix back if the original had it."""

        if original.starts_with_unc_escape():
            prefix = b'\\\\?' if resolved.startswith(b'\\') else b'\\\\?\\'
            return prefix + resolved
        return resolved


POSIX = PosixRules()
WINDOWS = WindowsRules()


def is_unix_style(flags):
    """Check if we should use Unix style."""

    if flags & FORCEWIN and flags & FORCEUNIX:
        flags ^= FORCEWIN | FORCEUNIX
    if flags & FORCEWIN:
        return False
    if flags & FORCEUNIX:
        return True
    return util.platform() != "windows"


def get_rules(flags=0):
    """Get the path rules for the flags."""

    return POSIX if is_unix_style(flags) else WINDOWS


__all__ = (
    "FORCEWIN", "FORCEUNIX", "PlatformRules", "PosixRules", "WindowsRules",
    "POSIX", "WINDOWS", "is_unix_style", "get_rules"
)
