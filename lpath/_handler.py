"""
Environment access.

The path core never touches the file system itself. Making a path absolute and
asking for the working directory go through a `PathHandler`.
"""
import errno
import logging
import os

logger = logging.getLogger(__name__)


class PathResolveError(OSError):
    """A path handler failed to resolve a path."""

    def __init__(self, operation, path, error):
        """Initialize."""

        code = error.errno if getattr(error, 'errno', None) is not None else errno.EIO
        strerror = getattr(error, 'strerror', None) or str(error) or os.strerror(code)
        super(PathResolveError, self).__init__(code, strerror)
        self.operation = operation
        self.path = path

    def __str__(self):
        """Message."""

        return "{}:{}:(errno={}): {}".format(self.operation, self.path, self.errno, self.strerror)


class PathHandler(object):
    """Resolve paths against an environment."""

    def resolve_path(self, path):
        """Return the absolute, file system backed form of `path`."""

        raise NotImplementedError

    def get_working_directory(self):
        """Return the current working directory."""

        raise NotImplementedError


class OsPathHandler(PathHandler):
    """Resolve paths against the running process."""

    def resolve_path(self, path):
        """Make the path absolute."""

        return os.path.abspath(path)

    def get_working_directory(self):
        """Get the working directory."""

        return os.getcwd()


DEFAULT_HANDLER = OsPathHandler()


def resolve(operation, handler, path):
    """Resolve `path` with the handler, raising `PathResolveError` on failure."""

    handler = DEFAULT_HANDLER if handler is None else handler
    logger.debug("%s: resolving %r", operation, path)
    try:
        return handler.resolve_path(path)
    except OSError as e:
        logger.warning("%s: failed to resolve %r: %s", operation, path, e)
        raise PathResolveError(operation, path, e) from e


def working_directory(operation, handler):
    """Get the working directory from the handler, raising `PathResolveError` on failure."""

    handler = DEFAULT_HANDLER if handler is None else handler
    try:
        cwd = handler.get_working_directory()
    except OSError as e:
        logger.warning("%s: failed to get the working directory: %s", operation, e)
        raise PathResolveError(operation, '', e) from e
    logger.debug("%s: working directory is %r", operation, cwd)
    return cwd
