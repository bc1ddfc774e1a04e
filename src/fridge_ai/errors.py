"""
Error taxonomy for the recommendation pipeline.

Every failure that reaches a caller is one of these, so the client can
show the right message. Local cache corruption is deliberately NOT an
error here: the stores treat it as "no cached value".
"""

from typing import Optional


class FridgeAIError(Exception):
    """Base class for user-facing pipeline failures."""

    http_status = 500
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class CredentialError(FridgeAIError):
    """The AI service API key is missing or was rejected."""

    http_status = 500
    default_message = "Invalid API key. Please check your configuration."


class ConnectivityError(FridgeAIError):
    """No network path to the AI service (connect failure or timeout)."""

    http_status = 503
    default_message = "Cannot reach the AI service. Check your network connection."


class UpstreamError(FridgeAIError):
    """The AI service answered with a non-2xx status."""

    http_status = 502

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Server error ({status}): {message}")


class FormatError(FridgeAIError):
    """A 2xx response whose body does not have the expected shape."""

    http_status = 502
    default_message = "Invalid response from the AI service. Please try again."


class TransportError(FridgeAIError):
    """Last-resort wrapper around an unexpected HTTP transport failure."""

    http_status = 502

    def __init__(self, cause: Exception, message: Optional[str] = None):
        self.cause = cause
        super().__init__(message or f"Network error: {cause}")


class AnalysisSuperseded(FridgeAIError):
    """A newer image capture replaced this in-flight analysis."""

    http_status = 409
    default_message = "This analysis was replaced by a newer photo."
