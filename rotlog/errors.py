"""Exception types raised by the rotation, tail, and writer layers."""


class RotlogError(Exception):
    """Base class for all rotlog errors."""


class ConfigError(RotlogError):
    """Raised when a configuration value cannot be used (unknown level, bad size)."""


class IOFailure(RotlogError):
    """Raised when a filesystem operation on the log directory fails.

    Wraps the underlying ``OSError`` (available as ``__cause__``) and keeps the
    path that was being touched, if any.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class UnsupportedOperation(RotlogError):
    """Raised when an operation needs a file-backed logger but output is STDOUT."""
