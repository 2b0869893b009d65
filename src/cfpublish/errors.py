"""Errors raised while publishing.

Every error is fatal to the run. The CLI maps each class to its own exit code.
"""


class PublishError(Exception):
    """Base exception for publishing failures."""

    exit_code = 1


class ConfigurationError(PublishError):
    """Raised when the publish configuration is missing or invalid."""

    exit_code = 2


class AuthError(PublishError):
    """Raised when the API rejects the token."""

    exit_code = 3


class NetworkError(PublishError):
    """Raised when the remote service cannot be reached."""

    exit_code = 4


class ParseError(PublishError):
    """Raised when a response body does not match the expected schema."""

    exit_code = 5

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class VersionResolutionError(PublishError):
    """Raised when a version label matches no catalog entry."""

    exit_code = 6

    def __init__(self, label: str) -> None:
        super().__init__(f"Version {label} is not valid for this game!")
        self.label = label


class UploadError(PublishError):
    """Raised when the remote service rejects an upload."""

    exit_code = 7

    def __init__(self, message: str, status_code: int | None = None, detail: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
