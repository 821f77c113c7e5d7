"""Unit tests for the Miniflux API client."""

from urllib.parse import parse_qs, urlparse

import pytest
import requests

from fakes import entry_payload, make_response, make_session
from miniflux_connector.config import AUTH_TOKEN, ConnectorConfig
from miniflux_connector.miniflux import MinifluxClient, parse_category_ids


def make_config(**overrides):
    values = {
        "site": "https://rss.example.com/",
        "username": "jane",
        "password": "secret",
    }
    values.update(overrides)
    return ConnectorConfig(**values)


def query_of(url):
    return parse_qs(urlparse(url).query)


class TestEntriesUrlUnit:
    """Unit tests for the unread entries query."""

    def test_default_query(self):
        client = MinifluxClient(make_config(), session=make_session())

        url = client.build_entries_url()

        assert url == (
            "https://rss.example.com/v1/entries"
            "?status=unread&order=published_at&direction=desc&limit=50"
        )

    def test_recency_window(self):
        client = MinifluxClient(make_config(days=2), session=make_session())

        url = client.build_entries_url(now=1_700_000_000)

        assert query_of(url)["published_after"] == ["1699827200"]
        assert "published_after=1699827200&limit=50" in url

    def test_no_recency_window_when_days_is_zero(self):
        client = MinifluxClient(make_config(days=0), session=make_session())

        assert "published_after" not in client.build_entries_url(now=1_700_000_000)

    def test_custom_limit(self):
        client = MinifluxClient(make_config(limit=500), session=make_session())

        assert query_of(client.build_entries_url())["limit"] == ["500"]

    @pytest.mark.parametrize("category_filter", ["0", "", "   ", " 0 "])
    def test_category_filter_meaning_all(self, category_filter):
        client = MinifluxClient(
            make_config(category_filter=category_filter), session=make_session()
        )

        assert "category_id" not in query_of(client.build_entries_url())

    def test_single_category(self):
        client = MinifluxClient(make_config(category_filter="7"), session=make_session())

        assert query_of(client.build_entries_url())["category_id"] == ["7"]

    def test_multiple_categories(self):
        client = MinifluxClient(make_config(category_filter="1,5"), session=make_session())

        url = client.build_entries_url()

        assert query_of(url)["category_id"] == ["1", "5"]
        assert url.endswith("&category_id=1&category_id=5")

    def test_parse_category_ids_trims_and_skips_blanks(self):
        assert parse_category_ids(" 3 , ,7,0") == ["3", "7"]
        assert parse_category_ids(None) == []


class TestMinifluxClientUnit:
    """Unit tests for the HTTP calls."""

    def test_get_current_user(self):
        session = make_session(make_response(json_data={"id": 1, "username": "jane"}))
        client = MinifluxClient(make_config(), session=session)

        user = client.get_current_user()

        assert user["username"] == "jane"
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://rss.example.com/v1/me")
        assert kwargs["headers"]["Authorization"].startswith("Basic ")
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["timeout"] == 30

    def test_token_header_sent(self):
        session = make_session(make_response(json_data={"username": "jane"}))
        config = make_config(auth_scheme=AUTH_TOKEN, api_token="abc123")
        client = MinifluxClient(config, session=session)

        client.get_current_user()

        headers = session.request.call_args.kwargs["headers"]
        assert headers["X-Auth-Token"] == "abc123"
        assert "Authorization" not in headers

    def test_get_unread_entries(self):
        payload = {"total": 2, "entries": [entry_payload(10), entry_payload(11)]}
        session = make_session(make_response(json_data=payload))
        client = MinifluxClient(make_config(), session=session)

        page = client.get_unread_entries()

        assert page.total == 2
        assert [entry.id for entry in page.entries] == [10, 11]
        assert page.entries[0].feed.category.title == "Tech"

    def test_get_unread_entries_rejects_non_object(self):
        session = make_session(make_response(json_data=[1, 2, 3]))
        client = MinifluxClient(make_config(), session=session)

        with pytest.raises(ValueError):
            client.get_unread_entries()

    @pytest.mark.parametrize(
        "feed, message",
        [
            ("Example Blog", "entry feed must be an object"),
            ([42], "entry feed must be an object"),
            ({"id": 42, "title": "Example Blog", "category": "Tech"}, "category must be an object"),
        ],
    )
    def test_get_unread_entries_rejects_malformed_feed(self, feed, message):
        raw = entry_payload(10)
        raw["feed"] = feed
        session = make_session(make_response(json_data={"total": 1, "entries": [raw]}))
        client = MinifluxClient(make_config(), session=session)

        with pytest.raises(ValueError, match=message):
            client.get_unread_entries()

    def test_update_entry_status(self):
        session = make_session(make_response(status_code=204))
        client = MinifluxClient(make_config(), session=session)

        client.update_entry_status(10, "read")

        args, kwargs = session.request.call_args
        assert args == ("PUT", "https://rss.example.com/v1/entries")
        assert kwargs["json"] == {"entry_ids": [10], "status": "read"}

    def test_toggle_bookmark_sends_no_body(self):
        session = make_session(make_response(status_code=204))
        client = MinifluxClient(make_config(), session=session)

        client.toggle_bookmark(10)

        args, kwargs = session.request.call_args
        assert args == ("PUT", "https://rss.example.com/v1/entries/10/bookmark")
        assert "json" not in kwargs
        assert "data" not in kwargs

    def test_http_errors_propagate(self):
        session = make_session(make_response(status_code=401))
        client = MinifluxClient(make_config(), session=session)

        with pytest.raises(requests.HTTPError):
            client.get_current_user()

    def test_transport_errors_propagate(self):
        session = make_session(requests.ConnectionError("connection refused"))
        client = MinifluxClient(make_config(), session=session)

        with pytest.raises(requests.ConnectionError):
            client.toggle_bookmark(10)
