import pytest

from core.url_classifier import classify, is_valid_url


@pytest.mark.parametrize("text", [
    "https://www.youtube.com/watch?v=x",
    "http://example.com",
    "HTTPS://EXAMPLE.COM/path",
    "http://localhost:8080/a b",
    "https://user:pw@example.org/?q=1#frag",
    "http:example.com",
    "https:/www.google.com",
    "https:\\\\example.com",
    "https:///example.com/path",
])
def test_http_urls_are_urls(text):
    assert classify(text).is_url is True


@pytest.mark.parametrize("text", [
    "",
    "hello world",
    "example.com",
    "/relative/path",
    "ftp://files.example.com/readme",
    "mailto:someone@example.com",
    "javascript:alert(1)",
    "http://",
    "https://exa mple.com",
    "http://example.com:99999",
    "http://[::1",
])
def test_everything_else_is_not(text):
    assert classify(text).is_url is False


def test_non_string_input_does_not_raise():
    assert is_valid_url(None) is False
    assert is_valid_url(42) is False
