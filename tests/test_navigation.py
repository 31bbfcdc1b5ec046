from core.navigation import QUICK_LINKS, NavigationResolver, encode_component, get_quick_link
from core.schemas import UserSettings


def test_search_phrase_becomes_google_query():
    resolution = NavigationResolver().resolve("hello world")

    assert resolution.target_url == "https://www.google.com/search?q=hello%20world"
    assert resolution.record.url == resolution.target_url
    assert resolution.record.title == "Google Search"
    assert resolution.record.icon == "google"


def test_url_passes_through_with_inferred_metadata():
    resolution = NavigationResolver().resolve("https://www.youtube.com/watch?v=x")

    assert resolution.target_url == "https://www.youtube.com/watch?v=x"
    assert resolution.record.title == "YouTube Video"
    assert resolution.record.icon == "youtube"


def test_input_is_trimmed():
    resolution = NavigationResolver().resolve("   https://github.com/   ")
    assert resolution.target_url == "https://github.com/"


def test_non_http_scheme_is_searched():
    resolution = NavigationResolver().resolve("ftp://files.example.com")
    assert resolution.target_url == "https://www.google.com/search?q=ftp%3A%2F%2Ffiles.example.com"


def test_blank_input_is_a_no_op():
    resolver = NavigationResolver()
    assert resolver.resolve("") is None
    assert resolver.resolve("   \t") is None
    assert resolver.go("  ") is None


def test_each_resolution_gets_a_fresh_id():
    resolver = NavigationResolver()
    assert resolver.resolve("cats").record.id != resolver.resolve("cats").record.id


def test_proxy_url_embeds_whole_encoded_url():
    resolver = NavigationResolver(proxy_base="https://proxy.example")
    proxy = resolver.build_proxy_url("https://www.google.com/search?q=hello%20world")
    assert proxy == "https://proxy.example/https%3A%2F%2Fwww.google.com%2Fsearch%3Fq%3Dhello%2520world"


def test_encode_component_matches_browser_rules():
    assert encode_component("a b&c/d") == "a%20b%26c%2Fd"
    assert encode_component("it's (fine)!*~") == "it's%20(fine)!*~"


class RecordingSink:
    def __init__(self):
        self.records = []

    def append(self, record):
        self.records.append(record)


def test_go_records_history_when_enabled():
    sink = RecordingSink()
    navigation = NavigationResolver().go("python docs", sink, UserSettings())

    assert navigation.saved is True
    assert sink.records == [navigation.resolution.record]
    assert navigation.proxy_url.startswith("https://foreverkyx.lavipet.info/https%3A%2F%2Fwww.google.com")


def test_go_skips_history_when_disabled():
    sink = RecordingSink()
    navigation = NavigationResolver().go("python docs", sink, UserSettings(saveHistory=False))

    assert navigation.saved is False
    assert sink.records == []


def test_quick_links_lookup():
    assert len(QUICK_LINKS) == 6
    assert get_quick_link("2").url == "https://www.youtube.com"
    assert get_quick_link("99") is None
