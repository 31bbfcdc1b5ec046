from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

ALLOWED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class Classification:
    is_url: bool


def split_url(text: str) -> SplitResult:
    """urlsplit, reading http/https inputs the way browsers do.

    For web schemes any run of "/" or "\\" after the colon introduces the
    host, so "http:example.com" and "https:\\\\example.com" both carry a host.
    """
    parts = urlsplit(text)
    if parts.scheme.lower() in ALLOWED_SCHEMES and not parts.netloc:
        rest = text.split(":", 1)[1].lstrip("/\\")
        parts = urlsplit(f"{parts.scheme}://{rest}")
    return parts


def is_valid_url(text) -> bool:
    """True iff text is an absolute http/https URL. Never raises."""
    if not isinstance(text, str):
        return False
    try:
        parts = split_url(text)
        # Accessing .port validates the netloc (bad ports raise ValueError)
        parts.port
    except ValueError:
        return False
    host = parts.hostname
    if not host or any(ch.isspace() for ch in host):
        return False
    return parts.scheme.lower() in ALLOWED_SCHEMES


def classify(text) -> Classification:
    """Decide whether input is a navigable URL or a search phrase."""
    return Classification(is_url=is_valid_url(text))
