"""Exceptions raised by the gitpeek core.

Decoders never terminate the process themselves. Every malformed or
unreadable input surfaces as one of these exceptions, and the CLI entry
point is the only place that turns them into an abnormal exit.
"""


class GitPeekError(Exception):
    """Base exception for gitpeek."""

    pass


class NotARepositoryError(GitPeekError):
    """Raised when no repository directory can be found."""

    pass


class ObjectNotFoundError(GitPeekError):
    """Raised when an object file is missing or cannot be opened."""

    pass


class CorruptObjectError(GitPeekError):
    """Raised when an object file is not a valid zlib stream."""

    pass


class InvalidHashError(GitPeekError):
    """Raised when an object id is not a usable hex string."""

    pass


class FramingError(GitPeekError):
    """Raised when decompressed object bytes do not match the expected grammar."""

    def __init__(self, message: str, fragment: bytes = b''):
        super().__init__(message)
        self.fragment = fragment


class InvalidHeaderError(FramingError):
    """Raised when an object header is not ``<type> <length>\\0``."""

    pass


class InvalidTreeEntryError(FramingError):
    """Raised when a tree entry is not ``<mode> <name>\\0<20 bytes>``."""

    pass


class UnexpectedEndOfStreamError(GitPeekError):
    """Raised when a mandatory read runs out of bytes."""

    def __init__(self, message: str, received: bytes = b''):
        super().__init__(message)
        self.received = received


class RefError(GitPeekError):
    """Raised when the refs directory or HEAD cannot be read."""

    pass
