# File: tests/test_utils.py
import pytest

from spa_nav.utils import filename_of, is_spa_link, loads_document, page_name


@pytest.mark.parametrize(
    "url,expected",
    [
        ("discover.html", "discover.html"),
        ("/music/albums.html", "albums.html"),
        ("", "index.html"),
        ("/", "index.html"),
        ("/music/", "index.html"),
    ],
)
def test_filename_of(url, expected):
    assert filename_of(url) == expected


@pytest.mark.parametrize(
    "filename,expected",
    [("index.html", "home"), ("discover.html", "discover"), ("liked", "liked")],
)
def test_page_name(filename, expected):
    assert page_name(filename) == expected


@pytest.mark.parametrize(
    "href,expected",
    [
        ("discover.html", True),
        ("music/albums.html", True),
        ("https://example.com/page.html", False),
        ("http://example.com/page.html", False),
        ("//example.com/page.html", False),
        ("#top", False),
        ("mailto:hi@example.com", False),
        ("javascript:void(0)", False),
        ("cover.jpg", False),
        ("", False),
        (None, False),
    ],
)
def test_is_spa_link(href, expected):
    assert is_spa_link(href) is expected


def test_is_spa_link_custom_extension():
    assert is_spa_link("about.htm", ".htm") is True
    assert is_spa_link("about.html", ".htm") is False


@pytest.mark.parametrize(
    "href,expected",
    [
        ("albums.html", True),
        ("cover.jpg", True),
        ("https://example.com/page.html", True),
        ("#top", False),
        ("mailto:hi@example.com", False),
        ("tel:+100200300", False),
        ("javascript:void(0)", False),
        ("", False),
        (None, False),
    ],
)
def test_loads_document(href, expected):
    assert loads_document(href) is expected
