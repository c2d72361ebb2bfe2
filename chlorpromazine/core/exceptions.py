"""Custom exception hierarchy for the Chlorpromazine server."""


class ChlorpromazineError(Exception):
    """Base exception for server-level issues."""


class ConfigurationError(ChlorpromazineError):
    """Raised when configuration or the definition catalog is invalid."""


class ExternalServiceError(ChlorpromazineError):
    """Raised when an external dependency responds with an error."""


class RateLimitExceeded(ExternalServiceError):
    """Raised when the upstream API reports rate limiting."""


class ServiceDisabledError(ExternalServiceError):
    """Raised when a collaborator is not configured; the message is safe to show."""
