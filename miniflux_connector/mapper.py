"""Entry to display item mapping for the Miniflux connector."""

from datetime import UTC, datetime

from dateutil import parser as date_parser

from .actions import SingleActionSet, ToggleActionSet
from .logging_config import create_execution_logger
from .models import DisplayItem, Identity, MinifluxEntry, MinifluxFeed

FAVICON_URL = "https://icons.duckduckgo.com/ip3/{domain}.ico"


def extract_domain(site_url: str | None) -> str:
    """Strip the scheme and everything after the first remaining slash.

    Args:
        site_url: Site URL of a feed

    Returns:
        Domain part of the URL, or an empty string
    """
    if not site_url:
        return ""
    remainder = site_url.strip()
    if "://" in remainder:
        remainder = remainder.split("://", 1)[1]
    return remainder.split("/", 1)[0]


def favicon_url(site_url: str | None) -> str | None:
    domain = extract_domain(site_url)
    if not domain:
        return None
    return FAVICON_URL.format(domain=domain)


def parse_published_at(value: str | int | float | None) -> datetime:
    """Parse a Miniflux publication timestamp into an aware datetime.

    ISO-8601 strings and epoch seconds are accepted; naive values are taken
    as UTC.

    Raises:
        ValueError: If the timestamp is missing or cannot be parsed
    """
    if value is None or value == "":
        raise ValueError("Entry has no publication date")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Invalid publication date '{value}': {e}")
    try:
        published = date_parser.isoparse(value)
    except (ValueError, TypeError):
        try:
            published = date_parser.parse(value)
        except (ValueError, TypeError, OverflowError) as e:
            raise ValueError(f"Invalid publication date '{value}': {e}")
    if published.tzinfo is None:
        published = published.replace(tzinfo=UTC)
    return published


class EntryMapper:
    """Turns Miniflux entries into host display items."""

    def __init__(
        self,
        action_set: ToggleActionSet | SingleActionSet,
        execution_id: str | None = None,
    ):
        self.action_set = action_set
        self.logger = create_execution_logger("mapper", execution_id)

    def map_entries(self, entries: list[MinifluxEntry]) -> list[DisplayItem]:
        """Map entries keeping the order the server returned them in."""
        return [self.map_entry(entry) for entry in entries]

    def map_entry(self, entry: MinifluxEntry) -> DisplayItem:
        """Map a single entry.

        Args:
            entry: Entry returned by Miniflux

        Returns:
            DisplayItem whose optional fields are only set when the entry
            provides a value for them
        """
        item = DisplayItem(
            uri=f"{entry.url}#{entry.id}",
            date=parse_published_at(entry.published_at),
            title=entry.title,
            body=entry.content,
        )

        feed = entry.feed
        if feed and feed.title and feed.title.strip():
            item.author = self._identity(feed, with_uri=False)
            item.source = self._identity(feed, with_uri=True)

            category = feed.category
            if category and category.title and category.title.strip():
                item.category = category.title

        item.actions = self.action_set.actions_for(entry)

        self.logger.debug(
            "Mapped entry",
            entry_id=entry.id,
            item_uri=item.uri,
            actions=sorted(item.actions),
        )
        return item

    @staticmethod
    def _identity(feed: MinifluxFeed, with_uri: bool) -> Identity:
        # A fresh object per call, so author and source are never shared
        identity = Identity(name=feed.title)
        if feed.site_url:
            identity.avatar = favicon_url(feed.site_url)
            if with_uri:
                identity.uri = feed.site_url
        return identity
