"""Data models for the Miniflux connector."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class MinifluxCategory:
    """Category embedded in a Miniflux feed."""

    id: int | None = None
    title: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MinifluxCategory":
        return cls(id=data.get("id"), title=data.get("title"))


@dataclass
class MinifluxFeed:
    """Feed embedded in a Miniflux entry."""

    id: int | None = None
    title: str | None = None
    site_url: str | None = None
    category: MinifluxCategory | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MinifluxFeed":
        category = data.get("category")
        if category and not isinstance(category, dict):
            raise ValueError("Unexpected response from Miniflux: feed category must be an object")
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            site_url=data.get("site_url"),
            category=MinifluxCategory.from_dict(category) if category else None,
        )


@dataclass
class MinifluxEntry:
    """Represents a single article returned by the Miniflux API."""

    id: int
    url: str
    title: str | None = None
    content: str | None = None
    published_at: str | int | None = None
    status: str = "unread"
    starred: bool = False
    author: str | None = None
    feed: MinifluxFeed | None = None

    @property
    def is_unread(self) -> bool:
        # "removed" entries are treated like read ones
        return self.status == "unread"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MinifluxEntry":
        """Build an entry from the JSON object returned by Miniflux.

        Raises:
            ValueError: If the entry has no id or a malformed feed
        """
        if data.get("id") is None:
            raise ValueError("Miniflux entry without an id")

        feed = data.get("feed")
        if feed and not isinstance(feed, dict):
            raise ValueError("Unexpected response from Miniflux: entry feed must be an object")
        return cls(
            id=data["id"],
            url=data.get("url") or "",
            title=data.get("title"),
            content=data.get("content"),
            published_at=data.get("published_at"),
            status=data.get("status") or "unread",
            starred=bool(data.get("starred", False)),
            author=data.get("author") or None,
            feed=MinifluxFeed.from_dict(feed) if feed else None,
        )


@dataclass
class MinifluxEntriesPage:
    """Response of ``GET /v1/entries``."""

    total: int
    entries: list[MinifluxEntry]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MinifluxEntriesPage":
        raw_entries = data.get("entries") or []
        if not isinstance(raw_entries, list) or not all(
            isinstance(raw, dict) for raw in raw_entries
        ):
            raise ValueError("Unexpected response from Miniflux: entries must be a list of objects")
        entries = [MinifluxEntry.from_dict(raw) for raw in raw_entries]
        return cls(total=data.get("total", len(entries)), entries=entries)


@dataclass
class Identity:
    """A named actor shown as author or source of a display item."""

    name: str
    uri: str | None = None
    avatar: str | None = None

    def to_dict(self) -> dict[str, str]:
        return _without_empty(
            {"name": self.name, "uri": self.uri, "avatar": self.avatar}
        )


@dataclass
class DisplayItem:
    """Represents a timeline item handed to the host."""

    uri: str
    date: datetime
    title: str | None = None
    body: str | None = None
    author: Identity | None = None
    source: Identity | None = None
    category: str | None = None
    actions: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Host-facing representation.

        Fields without a value are left out instead of being set to a
        placeholder, since the host would render the placeholder as text.
        """
        return _without_empty(
            {
                "uri": self.uri,
                "date": self.date.isoformat(),
                "title": self.title,
                "body": self.body,
                "author": self.author.to_dict() if self.author else None,
                "source": self.source.to_dict() if self.source else None,
                "category": self.category,
                "actions": dict(self.actions) if self.actions else None,
            }
        )


def _without_empty(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
