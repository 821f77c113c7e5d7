"""Miniflux REST API client for the Miniflux connector."""

import time
from typing import Any
from urllib.parse import urlencode

import requests

from .auth import build_auth
from .config import ConnectorConfig
from .logging_config import create_execution_logger
from .models import MinifluxEntriesPage

SECONDS_PER_DAY = 24 * 60 * 60


def parse_category_ids(category_filter: str | None) -> list[str]:
    """Split a comma-separated category filter into the ids to send.

    Blank values and ``0`` mean "all categories" and are dropped.
    """
    if not category_filter:
        return []
    ids = []
    for raw in category_filter.split(","):
        category_id = raw.strip()
        if category_id and category_id != "0":
            ids.append(category_id)
    return ids


class MinifluxClient:
    """Issues the HTTP calls the connector needs against one Miniflux instance."""

    def __init__(
        self,
        config: ConnectorConfig,
        session: requests.Session | None = None,
        execution_id: str | None = None,
    ):
        """Initialize the client.

        Args:
            config: Connector configuration
            session: HTTP session to use (a new one is created if omitted)
            execution_id: Execution ID for logging context
        """
        self.config = config
        self.auth = build_auth(config)
        self.session = session or requests.Session()
        self.logger = create_execution_logger("miniflux_client", execution_id)

        self.logger.debug(
            "MinifluxClient initialized",
            base_url=config.base_url,
            auth_scheme=self.auth.scheme,
            timeout=config.timeout,
        )

    def build_entries_url(self, now: float | None = None) -> str:
        """Build the unread entries query, newest first.

        Args:
            now: Current time in epoch seconds, used for the recency cutoff

        Returns:
            Complete URL of the ``GET /v1/entries`` request
        """
        params: list[tuple[str, Any]] = [
            ("status", "unread"),
            ("order", "published_at"),
            ("direction", "desc"),
        ]

        if self.config.days and self.config.days > 0:
            if now is None:
                now = time.time()
            params.append(
                ("published_after", int(now - self.config.days * SECONDS_PER_DAY))
            )

        params.append(("limit", self.config.effective_limit))

        for category_id in parse_category_ids(self.config.category_filter):
            params.append(("category_id", category_id))

        return f"{self.config.base_url}/v1/entries?{urlencode(params)}"

    def get_current_user(self) -> dict[str, Any]:
        """Fetch ``/v1/me``, which doubles as the authentication probe."""
        response = self._request("GET", f"{self.config.base_url}/v1/me")
        return response.json()

    def get_unread_entries(self, now: float | None = None) -> MinifluxEntriesPage:
        """Fetch one page of unread entries.

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the response body is not a valid entries page
        """
        url = self.build_entries_url(now)
        self.logger.info("Fetching unread entries", url=url)
        response = self._request("GET", url)
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Unexpected response from Miniflux: expected a JSON object")
        return MinifluxEntriesPage.from_dict(data)

    def update_entry_status(self, entry_id: int, status: str) -> None:
        """Set an entry's status to ``read`` or ``unread``."""
        self._request(
            "PUT",
            f"{self.config.base_url}/v1/entries",
            json={"entry_ids": [entry_id], "status": status},
        )

    def toggle_bookmark(self, entry_id: int) -> None:
        """Flip an entry's starred flag."""
        self._request("PUT", f"{self.config.base_url}/v1/entries/{entry_id}/bookmark")

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        self.logger.debug(f"{method} {url}", method=method, url=url)
        try:
            response = self.session.request(
                method,
                url,
                headers=self.auth.headers(),
                timeout=self.config.timeout,
                **kwargs,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.debug(
                f"Request to Miniflux failed: {e}",
                method=method,
                url=url,
                error=str(e),
            )
            raise

        self.logger.debug(
            "Miniflux responded",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        return response
