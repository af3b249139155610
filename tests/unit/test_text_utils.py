"""텍스트/URL 유틸리티 테스트"""
import pytest

from product_feed.utils.text_utils import (
    build_cache_key,
    collapse_whitespace,
    normalize_price_text,
    parse_rating_text,
    truncate_title,
)
from product_feed.utils.url_utils import build_search_url, normalize_href


class TestTextUtils:
    def test_collapse_whitespace(self):
        assert collapse_whitespace("  USB C \n  Cable\t6ft ") == "USB C Cable 6ft"
        assert collapse_whitespace(None) == ""

    def test_truncate_title(self):
        assert truncate_title("Short", 10) == "Short"
        assert truncate_title("Wireless Earbuds Pro", 10) == "Wireless E..."
        assert truncate_title("x" * 100) == "x" * 100

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("19.99", "$19.99"),
            ("$19.99", "$19.99"),
            ("$12.99 - $24.99", "$12.99 - $24.99"),
            ("Price not available", "Price not available"),
            ("", "Price not available"),
            (None, "Price not available"),
        ],
    )
    def test_normalize_price_text(self, raw, expected):
        assert normalize_price_text(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("4.5 out of 5 stars", "4.5"),
            ("5 out of 5 stars", "5"),
            ("no rating", "4.0"),
            (None, "4.0"),
        ],
    )
    def test_parse_rating_text(self, raw, expected):
        assert parse_rating_text(raw) == expected

    def test_cache_key_is_case_and_whitespace_insensitive(self):
        assert build_cache_key("  Electronics ", 6) == "electronics_6"
        assert build_cache_key("electronics", 6) == build_cache_key("ELECTRONICS", 6)
        assert build_cache_key("electronics", 6) != build_cache_key("electronics", 7)


class TestUrlUtils:
    @pytest.mark.parametrize(
        "href, expected",
        [
            ("/dp/B001", "https://www.amazon.com/dp/B001"),
            ("//m.media-amazon.com/i.jpg", "https://m.media-amazon.com/i.jpg"),
            ("https://example.com/a", "https://example.com/a"),
            ("dp/B002", "https://www.amazon.com/dp/B002"),
            ("data:image/gif;base64,R0lGOD", ""),
            ("javascript:void(0)", ""),
            ("", ""),
        ],
    )
    def test_normalize_href(self, href, expected):
        assert normalize_href(href) == expected

    def test_build_search_url(self):
        assert build_search_url("usb c cable") == "https://www.amazon.com/s?k=usb+c+cable&ref=nb_sb_noss"
        assert build_search_url("a&b", ref="sr_pg_1") == "https://www.amazon.com/s?k=a%26b&ref=sr_pg_1"
