"""
Metadata inference for resolved URLs.

Derives a human-readable title and an icon tag from the host of a URL.
Known hosts are matched by substring containment, in the priority order
of the tables below. Nothing here raises: an unparseable URL falls back
to FALLBACK_TITLE / FALLBACK_ICON.
"""

from typing import Optional

from core.url_classifier import split_url

FALLBACK_TITLE = "Web Page"
FALLBACK_ICON = "globe"

# (host needle, title)
KNOWN_TITLES = (
    ("google.com", "Google Search"),
    ("youtube.com", "YouTube Video"),
    ("wikipedia.org", "Wikipedia Article"),
    ("github.com", "GitHub Repository"),
)

# (host needles, icon tag)
KNOWN_ICONS = (
    (("google.com",), "google"),
    (("youtube.com",), "youtube"),
    (("wikipedia.org",), "book"),
    (("github.com",), "github"),
    (("twitter.com", "x.com"), "twitter"),
    (("facebook.com",), "facebook"),
    (("instagram.com",), "instagram"),
    (("reddit.com",), "reddit"),
    (("amazon.com",), "shopping-cart"),
    (("netflix.com",), "film"),
)


def _host_of(url) -> Optional[str]:
    if not isinstance(url, str):
        return None
    try:
        host = split_url(url.strip()).hostname
    except ValueError:
        return None
    return host or None


def _host_matches(host: str, needle: str) -> bool:
    # "x.com" is a suffix of unrelated hosts (netflix.com, dropbox.com),
    # so it only matches as a whole domain
    if needle == "x.com":
        return host == needle or host.endswith("." + needle)
    return needle in host


def infer_title(url) -> str:
    host = _host_of(url)
    if host is None:
        return FALLBACK_TITLE

    for needle, title in KNOWN_TITLES:
        if _host_matches(host, needle):
            return title

    labels = host.split(".")
    if len(labels) > 1:
        name = labels[-2]
        return name[:1].upper() + name[1:]
    return host


def infer_icon(url) -> str:
    host = _host_of(url)
    if host is None:
        return FALLBACK_ICON

    for needles, icon in KNOWN_ICONS:
        if any(_host_matches(host, needle) for needle in needles):
            return icon
    return FALLBACK_ICON
