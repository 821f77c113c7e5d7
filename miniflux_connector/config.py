"""Configuration management for the Miniflux connector."""

import os
from dataclasses import dataclass

# Authentication schemes accepted by the Miniflux API
AUTH_BASIC = "basic"
AUTH_TOKEN = "token"
AUTH_SCHEMES = (AUTH_BASIC, AUTH_TOKEN)

# Action set variants exposed on display items
ACTION_MODE_TOGGLE = "toggle"
ACTION_MODE_MARK_READ = "mark_read"
ACTION_MODES = (ACTION_MODE_TOGGLE, ACTION_MODE_MARK_READ)

DEFAULT_LIMIT = 50
DEFAULT_TIMEOUT = 30


def get_log_level() -> str:
    """Logging level from the environment, readable before the rest of the settings."""
    return os.getenv("LOG_LEVEL", "INFO")


@dataclass
class ConnectorConfig:
    """Settings the host collects from the user for one connector instance."""

    site: str = ""
    auth_scheme: str = AUTH_BASIC
    api_token: str = ""
    username: str = ""
    password: str = ""
    limit: int = DEFAULT_LIMIT
    days: int = 0
    category_filter: str = ""
    action_mode: str = ACTION_MODE_TOGGLE
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if self.auth_scheme not in AUTH_SCHEMES:
            raise ValueError(
                f"Unknown auth scheme '{self.auth_scheme}', expected one of {', '.join(AUTH_SCHEMES)}"
            )
        if self.action_mode not in ACTION_MODES:
            raise ValueError(
                f"Unknown action mode '{self.action_mode}', expected one of {', '.join(ACTION_MODES)}"
            )

    @property
    def base_url(self) -> str:
        """Instance URL without trailing slashes."""
        return self.site.strip().rstrip("/")

    @property
    def effective_limit(self) -> int:
        """Result cap sent to Miniflux, falling back to the default."""
        if not self.limit or self.limit <= 0:
            return DEFAULT_LIMIT
        return self.limit

    def required_fields(self) -> list[str]:
        """Names of the fields needed before any request can be made."""
        if self.auth_scheme == AUTH_TOKEN:
            return ["site", "api_token"]
        return ["site", "username", "password"]

    def missing_fields(self) -> list[str]:
        """Required fields that are still blank, in declaration order."""
        return [
            name
            for name in self.required_fields()
            if not (getattr(self, name) or "").strip()
        ]


class Config:
    """Loads connector settings from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.site = os.getenv("MINIFLUX_SITE", "")
        self.auth_scheme = os.getenv("MINIFLUX_AUTH_SCHEME", AUTH_BASIC).strip().lower()
        self.api_token = os.getenv("MINIFLUX_API_TOKEN", "")
        self.username = os.getenv("MINIFLUX_USERNAME", "")
        self.password = os.getenv("MINIFLUX_PASSWORD", "")
        self.limit = self._get_int("MINIFLUX_LIMIT", DEFAULT_LIMIT)
        self.days = self._get_int("MINIFLUX_DAYS", 0)
        self.category_filter = os.getenv("MINIFLUX_CATEGORY_FILTER", "")
        self.action_mode = os.getenv("MINIFLUX_ACTION_MODE", ACTION_MODE_TOGGLE).strip().lower()
        self.timeout = self._get_float("MINIFLUX_TIMEOUT", DEFAULT_TIMEOUT)

    @staticmethod
    def _get_int(name: str, default: int) -> int:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got '{raw}'")

    @staticmethod
    def _get_float(name: str, default: float) -> float:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{name} must be a number, got '{raw}'")

    def get_connector_config(self, **overrides) -> ConnectorConfig:
        """Get connector configuration.

        Args:
            **overrides: Field values taking precedence over the environment
                (``None`` values are ignored)

        Returns:
            ConnectorConfig built from the environment
        """
        values = {
            "site": self.site,
            "auth_scheme": self.auth_scheme,
            "api_token": self.api_token,
            "username": self.username,
            "password": self.password,
            "limit": self.limit,
            "days": self.days,
            "category_filter": self.category_filter,
            "action_mode": self.action_mode,
            "timeout": self.timeout,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ConnectorConfig(**values)
