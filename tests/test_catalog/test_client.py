"""Tests for GoogleBooksClient with the HTTP session mocked out."""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from bookflix.catalog import CatalogConfig, GoogleBooksClient, get_catalog_client, reset_client
from bookflix.catalog import client as client_module
from tests.test_catalog.conftest import make_volume

BASE_URL = "https://www.googleapis.com/books/v1/volumes"


def _response(payload=None, status_code=200, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


def _client(response=None, side_effect=None, **config):
    session = MagicMock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response
    return GoogleBooksClient(CatalogConfig(**config), session=session), session


class TestSearch:
    def test_sends_query_parameters(self):
        client, session = _client(_response({"items": [], "totalItems": 0}))
        client.search("dune", max_results=5, start_index=10)
        session.get.assert_called_once_with(
            BASE_URL,
            params={
                "q": "dune",
                "maxResults": 5,
                "startIndex": 10,
                "printType": "books",
                "orderBy": "relevance",
            },
            timeout=10.0,
        )

    def test_api_key_is_sent(self):
        client, session = _client(_response({}), api_key="secret")
        client.search("dune")
        assert session.get.call_args.kwargs["params"]["key"] == "secret"

    @pytest.mark.parametrize("requested,sent", [(0, 1), (100, 40), (20, 20)])
    def test_max_results_clamped(self, requested, sent):
        client, session = _client(_response({}))
        client.search("dune", max_results=requested)
        assert session.get.call_args.kwargs["params"]["maxResults"] == sent

    def test_parses_books(self):
        payload = {
            "totalItems": 2,
            "items": [make_volume("a", title="Dune"), make_volume("b", title="Emma")],
        }
        client, _ = _client(_response(payload))
        result = client.search("classics")
        assert [b.id for b in result.books] == ["a", "b"]
        assert result.total_items == 2

    def test_items_without_id_are_skipped(self):
        payload = {"totalItems": 2, "items": [{"volumeInfo": {"title": "x"}}, make_volume("b")]}
        client, _ = _client(_response(payload))
        assert [b.id for b in client.search("x").books] == ["b"]

    def test_mistyped_item_fields_do_not_break_search(self):
        payload = {
            "totalItems": 2,
            "items": [make_volume("ok", title="Dune"), {"id": "odd", "volumeInfo": {"publishedDate": 2004}}],
        }
        client, _ = _client(_response(payload))
        result = client.search("dune")
        assert [b.id for b in result.books] == ["ok", "odd"]
        assert result.books[1].published_date == "2004"

    def test_unusable_item_is_skipped(self, monkeypatch, caplog):
        real_format = client_module.format_book

        def format_or_fail(item):
            if item["id"] == "bad":
                raise ValueError("broken volume")
            return real_format(item)

        monkeypatch.setattr(client_module, "format_book", format_or_fail)
        payload = {"totalItems": 2, "items": [make_volume("bad"), make_volume("good")]}
        client, _ = _client(_response(payload))
        with caplog.at_level(logging.WARNING, logger="bookflix.catalog.client"):
            result = client.search("x")
        assert [b.id for b in result.books] == ["good"]
        assert "Skipping malformed catalog item" in caplog.text

    def test_missing_items_means_no_books(self):
        client, _ = _client(_response({"totalItems": 0}))
        result = client.search("zzzz")
        assert result.books == []
        assert result.total_items == 0

    def test_http_error_degrades_to_empty(self, caplog):
        client, _ = _client(_response(status_code=503))
        with caplog.at_level(logging.WARNING, logger="bookflix.catalog.client"):
            result = client.search("dune")
        assert result.books == []
        assert result.total_items == 0
        assert "failed" in caplog.text

    def test_timeout_degrades_to_empty(self):
        client, _ = _client(side_effect=requests.Timeout("read timed out"))
        assert client.search("dune").books == []

    def test_invalid_json_degrades_to_empty(self, caplog):
        client, _ = _client(_response(json_error=True))
        with caplog.at_level(logging.WARNING, logger="bookflix.catalog.client"):
            assert client.search("dune").books == []
        assert "Invalid JSON" in caplog.text


class TestGetById:
    def test_found(self):
        client, session = _client(_response(make_volume("abc", title="Dune")))
        book = client.get_by_id("abc")
        assert book.title == "Dune"
        assert session.get.call_args.args[0] == f"{BASE_URL}/abc"

    def test_non_mapping_volume_info(self):
        client, _ = _client(_response({"id": "abc", "volumeInfo": "broken"}))
        assert client.get_by_id("abc").title == "Unknown Title"

    def test_not_found_is_none(self):
        client, _ = _client(_response(status_code=404))
        assert client.get_by_id("missing") is None

    def test_connection_error_is_none(self):
        client, _ = _client(side_effect=requests.ConnectionError("offline"))
        assert client.get_by_id("abc") is None


class TestShelfQueries:
    def test_known_category_uses_curated_query(self):
        client, session = _client(_response({}))
        client.books_by_category("fantasy", 12)
        params = session.get.call_args.kwargs["params"]
        assert params["q"] == "subject:fantasy -subject:comics -subject:manga"
        assert params["maxResults"] == 12

    def test_unknown_category_falls_back_to_subject(self):
        client, session = _client(_response({}))
        client.books_by_category("poetry")
        assert session.get.call_args.kwargs["params"]["q"] == "subject:poetry"

    def test_mood_returns_twelve(self):
        client, session = _client(_response({}))
        client.books_by_mood("cozy")
        params = session.get.call_args.kwargs["params"]
        assert params["q"] == "cozy"
        assert params["maxResults"] == 12

    def test_publisher_returns_fifteen(self):
        client, session = _client(_response({}))
        client.comics_by_publisher("boom")
        params = session.get.call_args.kwargs["params"]
        assert params["q"] == "boom comics"
        assert params["maxResults"] == 15


class TestSingleton:
    def setup_method(self):
        reset_client()

    def teardown_method(self):
        reset_client()

    def test_same_instance(self):
        first = get_catalog_client(CatalogConfig())
        assert get_catalog_client() is first

    def test_reset_creates_new_instance(self):
        first = get_catalog_client(CatalogConfig())
        reset_client()
        assert get_catalog_client(CatalogConfig()) is not first

    def test_invalid_config_raises(self):
        with pytest.raises(ValueError, match="timeout"):
            get_catalog_client(CatalogConfig(timeout=0))
