"""Custom exception hierarchy for the Skytap publish URL step."""


class SkytapPublishError(Exception):
    """Base exception for all errors raised by the publish URL step."""

    pass


class PreconditionError(SkytapPublishError):
    """Raised when step parameters are missing or conflicting."""

    pass


class ConfigurationError(SkytapPublishError):
    """Raised when configuration (credentials, env) is invalid or missing."""

    pass


class IdentifierResolutionError(SkytapPublishError):
    """Raised when no configuration id can be derived from the inputs."""

    pass


class TransportError(SkytapPublishError):
    """Raised when the HTTP request could not be completed."""

    pass


class ApiError(SkytapPublishError):
    """Raised when the Skytap API reports an error."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(SkytapPublishError):
    """Raised when the response body does not have the expected shape."""

    pass


class PublishSetResolutionError(SkytapPublishError):
    """Raised when a publish set URL cannot be resolved."""

    pass


class UnsupportedPublishSetTypeError(PublishSetResolutionError):
    """Raised when the matched publish set hands out one URL per VM."""

    pass


class PublishSetNotFoundError(PublishSetResolutionError):
    """Raised when no publish set matches the requested name."""

    pass


class WriteError(SkytapPublishError):
    """Raised when the resolved URL cannot be written to disk."""

    pass
