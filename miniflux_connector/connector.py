"""Entry points of the Miniflux connector: verify, load and perform_action."""

import requests

from .actions import BOOKMARK_ACTIONS, READ_STATE_ACTIONS, build_action_set
from .config import ConnectorConfig
from .errors import (
    LOAD_ERROR_PREFIX,
    VERIFY_ERROR_PREFIX,
    ConfigIncompleteError,
    classify_error,
)
from .host import Host
from .logging_config import create_execution_logger
from .mapper import EntryMapper
from .miniflux import MinifluxClient
from .models import DisplayItem

DEFAULT_DISPLAY_NAME = "Miniflux Feed"


class MinifluxConnector:
    """Bridges a Miniflux instance to a timeline host.

    Each entry point issues at most one request and reports its outcome
    through the injected host.
    """

    def __init__(
        self,
        config: ConnectorConfig,
        host: Host,
        session: requests.Session | None = None,
        execution_id: str | None = None,
    ):
        """Initialize the connector.

        Args:
            config: Settings entered by the user
            host: Host receiving items, verification results and errors
            session: HTTP session shared by all requests
            execution_id: Execution ID for logging context
        """
        self.config = config
        self.host = host
        self.logger = create_execution_logger("connector", execution_id)
        self.client = MinifluxClient(config, session=session, execution_id=execution_id)
        self.action_set = build_action_set(config.action_mode)
        self.mapper = EntryMapper(self.action_set, execution_id=execution_id)

    def verify(self) -> str | None:
        """Check that the instance is reachable and the credentials work.

        Returns:
            Display name of the connection, or None while the configuration
            is still incomplete

        Raises:
            ConnectorError: If Miniflux could not be reached or rejected the
                credentials (already reported to the host)
        """
        missing = self.config.missing_fields()
        if missing:
            # The host calls verify while the user is still typing
            self.logger.info(
                "Configuration not complete yet, skipping verification",
                missing_fields=missing,
            )
            return None

        self.logger.log_execution_start("verify", base_url=self.config.base_url)
        try:
            user = self.client.get_current_user()
        except (requests.RequestException, ValueError) as e:
            error = classify_error(e, self.config.auth_scheme, VERIFY_ERROR_PREFIX)
            self.logger.log_execution_end(
                "verify",
                success=False,
                error_type=error.__class__.__name__,
                error=str(e),
            )
            self.host.report_error(error.message)
            raise error

        username = user.get("username") if isinstance(user, dict) else None
        display_name = f"Miniflux ({username})" if username else DEFAULT_DISPLAY_NAME

        self.logger.log_execution_end("verify", success=True, display_name=display_name)
        self.host.report_verified(display_name)
        return display_name

    def load(self, now: float | None = None) -> list[DisplayItem]:
        """Fetch unread entries and report them to the host as display items.

        Args:
            now: Current time in epoch seconds, used for the recency cutoff

        Returns:
            Display items in the order Miniflux returned them (newest first)

        Raises:
            ConnectorError: If the configuration is incomplete or the request
                failed (already reported to the host)
        """
        missing = self.config.missing_fields()
        if missing:
            error = ConfigIncompleteError(missing)
            self.logger.error(error.message, missing_fields=missing)
            self.host.report_error(error.message)
            raise error

        self.logger.log_execution_start("load", base_url=self.config.base_url)
        try:
            page = self.client.get_unread_entries(now)
            items = self.mapper.map_entries(page.entries)
        except (requests.RequestException, ValueError) as e:
            error = classify_error(e, self.config.auth_scheme, LOAD_ERROR_PREFIX)
            self.logger.log_execution_end(
                "load",
                success=False,
                error_type=error.__class__.__name__,
                error=str(e),
            )
            self.host.report_error(error.message)
            raise error

        self.logger.log_metrics({"total_unread": page.total, "items_loaded": len(items)})
        self.logger.log_execution_end("load", success=True, items_count=len(items))
        self.host.report_items(items)
        return items

    def perform_action(
        self, action_id: str, action_value: str, item: DisplayItem | None = None
    ) -> bool:
        """Run a user action on an entry.

        Failures are logged and swallowed so a failed state change never
        interrupts the user; the host is not told about them.

        Args:
            action_id: One of the action names exposed on the item
            action_value: Entry id the action applies to
            item: Display item to update once the action succeeded

        Returns:
            True if Miniflux accepted the change, False otherwise
        """
        if not self.action_set.supports(action_id):
            self.logger.warning(
                f"Unknown action: {action_id}",
                action_id=action_id,
                action_mode=self.action_set.mode,
            )
            return False

        try:
            entry_id = int(str(action_value).strip())
            if action_id in READ_STATE_ACTIONS:
                self.client.update_entry_status(entry_id, READ_STATE_ACTIONS[action_id])
            elif action_id in BOOKMARK_ACTIONS:
                self.client.toggle_bookmark(entry_id)
        except (requests.RequestException, ValueError) as e:
            self.logger.warning(
                f"Failed to perform {action_id}: {e}",
                action_id=action_id,
                entry_id=action_value,
                error=str(e),
            )
            return False

        if item is not None:
            item.actions = self.action_set.apply(item.actions, action_id)

        self.logger.log_action(action_id, str(action_value))
        return True
