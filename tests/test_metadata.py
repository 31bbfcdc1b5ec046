import pytest

from core.metadata import FALLBACK_ICON, FALLBACK_TITLE, infer_icon, infer_title


@pytest.mark.parametrize("url, title, icon", [
    ("https://www.google.com/search?q=cats", "Google Search", "google"),
    ("https://www.youtube.com/watch?v=x", "YouTube Video", "youtube"),
    ("https://en.wikipedia.org/wiki/Python", "Wikipedia Article", "book"),
    ("https://github.com/psf/requests", "GitHub Repository", "github"),
])
def test_known_hosts_with_titles(url, title, icon):
    assert infer_title(url) == title
    assert infer_icon(url) == icon


@pytest.mark.parametrize("url, icon", [
    ("https://twitter.com/home", "twitter"),
    ("https://x.com/someone", "twitter"),
    ("https://mobile.x.com/", "twitter"),
    ("https://www.facebook.com/", "facebook"),
    ("https://www.instagram.com/p/1", "instagram"),
    ("https://old.reddit.com/r/python", "reddit"),
    ("https://www.amazon.com/dp/123", "shopping-cart"),
    # x.com matches whole domains only: netflix.com stays film, dropbox.com stays globe
    ("https://www.netflix.com/browse", "film"),
    ("https://www.dropbox.com/", "globe"),
])
def test_icon_table(url, icon):
    assert infer_icon(url) == icon


def test_priority_order_prefers_earlier_entries():
    # Contains both needles; google.com is checked first
    assert infer_icon("https://youtube.com.google.com/") == "google"


def test_unknown_host_title_is_capitalized_second_level_label():
    assert infer_title("https://docs.python.org/3/") == "Python"
    assert infer_title("https://www.reddit.com/") == "Reddit"
    assert infer_icon("https://docs.python.org/3/") == "globe"


def test_dotless_host_title_is_whole_host():
    assert infer_title("http://localhost:3000/") == "localhost"


@pytest.mark.parametrize("url", ["not a url", "", None, "http://[::1"])
def test_unparseable_falls_back(url):
    assert infer_title(url) == FALLBACK_TITLE
    assert infer_icon(url) == FALLBACK_ICON
