"""Unit tests for entry to display item mapping."""

from datetime import UTC, datetime

import pytest

from fakes import entry_payload
from miniflux_connector.actions import SingleActionSet, ToggleActionSet
from miniflux_connector.mapper import (
    EntryMapper,
    extract_domain,
    favicon_url,
    parse_published_at,
)
from miniflux_connector.models import Identity, MinifluxEntry


def map_payload(payload, action_set=None):
    mapper = EntryMapper(action_set or ToggleActionSet())
    return mapper.map_entry(MinifluxEntry.from_dict(payload))


class TestEntryMapperUnit:
    """Unit tests for EntryMapper."""

    def test_full_entry(self):
        item = map_payload(entry_payload(10))

        assert item.uri == "https://example.com/articles/10#10"
        assert item.date == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
        assert item.title == "Article 10"
        assert item.body == "<p>Hello <b>world</b></p>"
        assert item.author == Identity(
            name="Example Blog",
            avatar="https://icons.duckduckgo.com/ip3/example.com.ico",
        )
        assert item.source == Identity(
            name="Example Blog",
            uri="https://example.com/blog",
            avatar="https://icons.duckduckgo.com/ip3/example.com.ico",
        )
        assert item.category == "Tech"
        assert item.actions == {"mark_as_read": "10", "star": "10"}

    def test_author_comes_from_feed_title_not_entry_author(self):
        item = map_payload(entry_payload(10, author="Jane Doe"))

        assert item.author.name == "Example Blog"

    def test_author_and_source_are_separate_objects(self):
        item = map_payload(entry_payload(10))

        assert item.author is not item.source
        item.author.name = "Changed"
        assert item.source.name == "Example Blog"

    def test_body_is_passed_through_unmodified(self):
        html = '<script>alert("x")</script><p onclick="y()">Text</p>'

        item = map_payload(entry_payload(10, content=html))

        assert item.body == html

    def test_entry_without_feed(self):
        item = map_payload(entry_payload(10, feed=False))

        assert item.author is None
        assert item.source is None
        assert item.category is None
        data = item.to_dict()
        assert "author" not in data
        assert "source" not in data
        assert "category" not in data

    def test_feed_without_site_url_has_no_avatar(self):
        payload = entry_payload(10)
        payload["feed"]["site_url"] = None

        item = map_payload(payload)

        assert item.author.to_dict() == {"name": "Example Blog"}
        assert item.source.to_dict() == {"name": "Example Blog"}

    def test_feed_without_title_has_no_identities(self):
        payload = entry_payload(10)
        payload["feed"]["title"] = "  "

        item = map_payload(payload)

        assert item.author is None
        assert item.source is None

    @pytest.mark.parametrize("category", [None, {"id": 3}, {"id": 3, "title": ""}])
    def test_category_requires_a_title(self, category):
        payload = entry_payload(10)
        payload["feed"]["category"] = category

        item = map_payload(payload)

        assert item.category is None
        assert "category" not in item.to_dict()

    def test_missing_title_and_content_are_omitted(self):
        payload = entry_payload(10)
        del payload["title"]
        del payload["content"]

        data = map_payload(payload).to_dict()

        assert "title" not in data
        assert "body" not in data

    def test_to_dict_shape(self):
        data = map_payload(entry_payload(10, status="read", starred=True)).to_dict()

        assert data == {
            "uri": "https://example.com/articles/10#10",
            "date": "2024-01-01T10:00:00+00:00",
            "title": "Article 10",
            "body": "<p>Hello <b>world</b></p>",
            "author": {
                "name": "Example Blog",
                "avatar": "https://icons.duckduckgo.com/ip3/example.com.ico",
            },
            "source": {
                "name": "Example Blog",
                "uri": "https://example.com/blog",
                "avatar": "https://icons.duckduckgo.com/ip3/example.com.ico",
            },
            "category": "Tech",
            "actions": {"mark_as_unread": "10", "unstar": "10"},
        }

    def test_single_action_mode(self):
        unread = map_payload(entry_payload(10, starred=True), SingleActionSet())
        read = map_payload(entry_payload(11, status="read"), SingleActionSet())

        assert unread.actions == {"mark_as_read": "10"}
        assert read.actions == {}
        assert "actions" not in read.to_dict()

    def test_map_entries_preserves_order(self):
        mapper = EntryMapper(ToggleActionSet())
        entries = [MinifluxEntry.from_dict(entry_payload(i)) for i in (30, 10, 20)]

        items = mapper.map_entries(entries)

        assert [item.uri.rsplit("#", 1)[1] for item in items] == ["30", "10", "20"]

    def test_invalid_publication_date_raises(self):
        with pytest.raises(ValueError):
            map_payload(entry_payload(10, published_at="garbage"))


class TestMapperHelpersUnit:
    """Unit tests for domain, favicon and date helpers."""

    @pytest.mark.parametrize(
        "site_url, expected",
        [
            ("https://www.example.com/path/to/page", "www.example.com"),
            ("http://example.org", "example.org"),
            ("https://blog.example.net:8443/", "blog.example.net:8443"),
            ("example.com/feed", "example.com"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_extract_domain(self, site_url, expected):
        assert extract_domain(site_url) == expected

    def test_favicon_url(self):
        assert (
            favicon_url("https://news.example.com/tech")
            == "https://icons.duckduckgo.com/ip3/news.example.com.ico"
        )
        assert favicon_url("") is None

    def test_parse_iso_with_offset(self):
        published = parse_published_at("2024-03-10T08:30:00+02:00")

        assert published == datetime(2024, 3, 10, 6, 30, tzinfo=UTC)

    def test_parse_naive_is_utc(self):
        published = parse_published_at("2024-05-01T12:00:00")

        assert published.tzinfo is not None
        assert published == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def test_parse_epoch_seconds(self):
        assert parse_published_at(0) == datetime(1970, 1, 1, tzinfo=UTC)
        assert parse_published_at(1_700_000_000) == datetime(
            2023, 11, 14, 22, 13, 20, tzinfo=UTC
        )

    @pytest.mark.parametrize("value", [None, "", "garbage", 10**20, -(10**20), float("nan")])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            parse_published_at(value)
