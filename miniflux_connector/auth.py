"""Authentication header builders for the Miniflux API."""

import base64

from .config import AUTH_TOKEN, ConnectorConfig

JSON_CONTENT_TYPE = {"Content-Type": "application/json"}


class TokenAuth:
    """API token sent in the ``X-Auth-Token`` header."""

    scheme = "token"

    def __init__(self, api_token: str):
        self.api_token = api_token

    def headers(self) -> dict[str, str]:
        return {"X-Auth-Token": self.api_token, **JSON_CONTENT_TYPE}


class BasicAuth:
    """HTTP Basic Authentication with ``username:password``."""

    scheme = "basic"

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def headers(self) -> dict[str, str]:
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        encoded = base64.b64encode(credentials).decode("ascii")
        return {"Authorization": f"Basic {encoded}", **JSON_CONTENT_TYPE}


def build_auth(config: ConnectorConfig) -> TokenAuth | BasicAuth:
    """Select the header builder for the configured scheme.

    Only the credentials of the selected scheme are used, so a deployment
    never sends both headers.
    """
    if config.auth_scheme == AUTH_TOKEN:
        return TokenAuth(config.api_token.strip())
    return BasicAuth(config.username.strip(), config.password)
