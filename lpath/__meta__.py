"""Meta related things."""
from collections import namedtuple

__all__ = ("Version", "version_info", "__version__", "__version_info__")

RELEASES = ("alpha", "beta", "candidate", "final")


class Version(namedtuple("Version", ["major", "minor", "micro", "release"])):
    """
    Get the version (PEP 440).

    Only the simple `major.minor.micro` form with an optional pre-release tag is supported.
    """

    def __new__(cls, major, minor, micro, release="final"):
        """Validate version info."""

        for value in (major, minor, micro):
            if not (isinstance(value, int) and value >= 0):
                raise ValueError("All version parts except 'release' should be integers.")
        if release not in RELEASES:
            raise ValueError("'{}' is not a valid release type.".format(release))
        return super(Version, cls).__new__(cls, major, minor, micro, release)

    def _get_canonical(self):
        """Get the canonical output string."""

        ver = "{}.{}.{}".format(self.major, self.minor, self.micro) if self.micro else "{}.{}".format(
            self.major, self.minor
        )
        if self.release != "final":
            ver += {"alpha": "a", "beta": "b", "candidate": "rc"}[self.release]
        return ver


version_info = __version_info__ = Version(1, 0, 0, "final")
__version__ = version_info._get_canonical()
