"""diskmaid: bounded directory inventory with sorting, totals and cleanup."""

__version__ = "0.1.0"


class DiskMaidError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, missing directories, and other
    recoverable input errors. The message is printed to stderr
    and the process exits with code 1.
    """


class ScanError(DiskMaidError):
    """The scan root could not be listed at all."""


class ConfigError(DiskMaidError):
    """Settings could not be written."""


class DeleteError(DiskMaidError):
    """A listed file could not be deleted."""
