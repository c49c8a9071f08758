"""Exceptions that stop an export run."""


class TuneLiftError(Exception):
    """Base exception for fatal export errors."""

    pass


class ExportFolderError(TuneLiftError):
    """Raised when the export folder cannot be created or read."""

    pass


class LibraryUnavailableError(TuneLiftError):
    """Raised when the media library cannot be reached or read."""

    pass
