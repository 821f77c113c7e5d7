"""Error taxonomy and user-facing messages for the Miniflux connector."""

import requests

from .config import AUTH_TOKEN

NOT_FOUND_MESSAGE = "Miniflux instance not found. Please check your instance URL."
TIMEOUT_MESSAGE = "Request timeout. Please check your internet connection."

VERIFY_ERROR_PREFIX = "Connection error: "
LOAD_ERROR_PREFIX = "Failed to connect to Miniflux: "


class ConnectorError(Exception):
    """Base class for failures reported to the host."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigIncompleteError(ConnectorError):
    """Required settings have not been filled in yet."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Missing required configuration: {', '.join(self.missing_fields)}"
        )


class AuthFailureError(ConnectorError):
    """Miniflux rejected the credentials (HTTP 401)."""


class NotFoundError(ConnectorError):
    """The instance URL does not point at a Miniflux API (HTTP 404)."""


class ConnectionTimeoutError(ConnectorError):
    """The request to Miniflux timed out."""


class TransportError(ConnectorError):
    """Any other HTTP, network or decoding failure."""


def auth_failure_message(auth_scheme: str) -> str:
    if auth_scheme == AUTH_TOKEN:
        return "Authentication failed. Please check your API token."
    return "Authentication failed. Please check your username and password."


def classify_error(error: Exception, auth_scheme: str, prefix: str) -> ConnectorError:
    """Map a failure to the error taxonomy with a message the user can act on.

    Args:
        error: Exception raised while talking to Miniflux
        auth_scheme: Configured authentication scheme, used to word 401 errors
        prefix: Prefix for messages of unclassified failures

    Returns:
        ConnectorError subclass carrying the user-facing message
    """
    if isinstance(error, ConnectorError):
        return error

    if isinstance(error, requests.Timeout):
        return ConnectionTimeoutError(TIMEOUT_MESSAGE)

    if isinstance(error, requests.HTTPError) and error.response is not None:
        status_code = error.response.status_code
        if status_code == 401:
            return AuthFailureError(auth_failure_message(auth_scheme))
        if status_code == 404:
            return NotFoundError(NOT_FOUND_MESSAGE)

    detail = str(error) or error.__class__.__name__
    return TransportError(f"{prefix}{detail}")
