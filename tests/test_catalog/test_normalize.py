"""Tests for the Google Books volume normalizer."""

import pytest

from bookflix.catalog import format_book, resolve_image_url
from tests.test_catalog.conftest import make_volume


class TestFormatBook:
    def test_empty_volume_gets_defaults(self):
        book = format_book({"id": "abc"})
        assert book.id == "abc"
        assert book.title == "Unknown Title"
        assert book.authors == ["Unknown Author"]
        assert book.description == "No description available"
        assert book.page_count == 0
        assert book.average_rating == 0
        assert book.ratings_count == 0
        assert book.categories == []
        assert book.image_links == {}
        assert book.language == "en"
        assert book.price == "Not for sale"

    def test_full_volume(self):
        item = {
            "id": "zyTCAlFPjgYC",
            "volumeInfo": {
                "title": "The Google Story",
                "authors": ["David A. Vise", "Mark Malseed"],
                "publisher": "Random House",
                "publishedDate": "2005-11-15",
                "description": "Here is the story...",
                "industryIdentifiers": [
                    {"type": "ISBN_10", "identifier": "055380457X"},
                    {"type": "ISBN_13", "identifier": "9780553804577"},
                ],
                "pageCount": 207,
                "categories": ["Browsers (Computer programs)"],
                "averageRating": 3.5,
                "ratingsCount": 136,
                "language": "fr",
                "previewLink": "http://books.google.com/books?id=zyTCAlFPjgYC&printsec=frontcover",
                "infoLink": "http://books.google.com/books?id=zyTCAlFPjgYC",
            },
            "saleInfo": {
                "listPrice": {"amount": 11.99, "currencyCode": "USD"},
                "buyLink": "https://play.google.com/store/books/details?id=zyTCAlFPjgYC",
            },
        }
        book = format_book(item)
        assert book.authors == ["David A. Vise", "Mark Malseed"]
        assert book.isbn == "055380457X"
        assert book.page_count == 207
        assert book.ratings_count == 136
        assert book.language == "fr"
        assert book.price == "11.99 USD"
        assert book.buy_link.startswith("https://play.google.com")
        assert book.info_link == "http://books.google.com/books?id=zyTCAlFPjgYC"

    @pytest.mark.parametrize("value", [-5, "many", None, [1]])
    def test_bad_numbers_become_zero(self, value):
        book = format_book(make_volume(pageCount=value, ratingsCount=value, averageRating=value))
        assert book.page_count == 0
        assert book.ratings_count == 0
        assert book.average_rating == 0

    def test_empty_authors_list(self):
        assert format_book(make_volume(authors=[])).authors == ["Unknown Author"]

    def test_image_sizes_fall_back_to_thumbnail(self):
        book = format_book(
            make_volume(imageLinks={"thumbnail": "http://books.google.com/c?id=1&zoom=1&edge=curl"})
        )
        assert set(book.image_links) == {"thumbnail", "small", "medium", "large", "extraLarge"}
        assert all(url.startswith("https://") for url in book.image_links.values())

    def test_mistyped_fields_are_treated_as_missing(self):
        book = format_book(
            make_volume(
                title=42,
                publishedDate=2004,
                description={"text": "x"},
                language=None,
                authors=["Ann", 7, None],
                industryIdentifiers=["9780553804577", {"identifier": "055380457X"}],
                imageLinks={"thumbnail": 3, "large": "http://books.google.com/l"},
            )
        )
        assert book.title == "42"
        assert book.published_date == "2004"
        assert book.description == "No description available"
        assert book.language == "en"
        assert book.authors == ["Ann", "7"]
        assert book.isbn == "055380457X"
        assert book.image_links == {"large": "https://books.google.com/l"}

    @pytest.mark.parametrize("volume_info", ["not a dict", 5, ["title"]])
    def test_non_mapping_volume_info(self, volume_info):
        book = format_book({"id": "x", "volumeInfo": volume_info, "saleInfo": "free"})
        assert book.title == "Unknown Title"
        assert book.price == "Not for sale"

    def test_nan_and_infinite_numbers(self):
        book = format_book(make_volume(averageRating=float("nan"), pageCount=float("inf")))
        assert book.average_rating == 0
        assert book.page_count == 0

    def test_normalized_books_always_usable(self):
        for item in [{"id": "a"}, make_volume(title="", authors=None), make_volume(pageCount=-1)]:
            book = format_book(item)
            assert book.title
            assert book.authors
            assert book.page_count >= 0
            assert book.ratings_count >= 0
            assert book.average_rating >= 0


class TestResolveImageUrl:
    def test_insecure_url_becomes_secure(self):
        url = resolve_image_url({"thumbnail": "http://books.google.com/books/content?id=x"}, "thumbnail")
        assert url.startswith("https://")

    def test_empty_stays_empty(self):
        assert resolve_image_url({}, "large") == ""
        assert resolve_image_url(None, "large") == ""
        assert resolve_image_url({"thumbnail": ""}, "thumbnail") == ""

    def test_prefers_requested_size(self):
        links = {"thumbnail": "https://t", "large": "https://l"}
        assert resolve_image_url(links, "large") == "https://l"

    def test_small_thumbnail_is_last_resort(self):
        assert resolve_image_url({"smallThumbnail": "https://s"}, "medium") == "https://s"
