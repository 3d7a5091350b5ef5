"""Exceptions raised by SSOFETCH operations.

Commands catch ``SsofetchError`` and abort with a console message.
"""


class SsofetchError(Exception):
    """Base class for errors that abort an install."""
    pass


class ConfigError(SsofetchError):
    """Raised when settings cannot be read or fail validation."""
    pass


class ExecutableNotFoundError(SsofetchError):
    """Raised when executable cannot be found in system PATH."""
    pass


class AuthenticationError(SsofetchError):
    """Raised when AWS SSO login or its verification fails."""
    pass


class InvalidS3UrlError(SsofetchError):
    """Raised when a URL does not point at an S3 object."""
    pass


class PresignError(SsofetchError):
    """Raised when a presigned URL cannot be generated."""
    pass


class DownloadError(SsofetchError):
    """Raised when the artifact download fails."""
    pass


class ChecksumMismatchError(SsofetchError):
    """Raised when a downloaded file fails integrity verification."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"SHA256 mismatch! Expected: {expected}, Got: {actual}")


class UnsupportedPlatformError(SsofetchError):
    """Raised when no artifact is published for the host CPU."""
    pass
