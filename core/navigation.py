"""
Navigation Resolver - turns raw search-bar input into a proxy redirect.

Flow for a "go" action:
1. Trim the input (empty input is a no-op)
2. Classify: URLs pass through, anything else becomes a search-engine query
3. Infer title/icon and build a NavigationRecord
4. Optionally hand the record to a history sink (gated by saveHistory)
5. Embed the resolved URL, percent-encoded, into the proxy base address
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol
from urllib.parse import quote

from core.metadata import infer_icon, infer_title
from core.schemas import NavigationRecord, QuickLink, UserSettings
from core.url_classifier import classify

logger = logging.getLogger("navigation")

DEFAULT_PROXY_BASE = "https://foreverkyx.lavipet.info/"
DEFAULT_SEARCH_TEMPLATE = "https://www.google.com/search?q={query}"

QUICK_LINKS: List[QuickLink] = [
    QuickLink(id="1", name="Google", icon="search", url="https://www.google.com"),
    QuickLink(id="2", name="YouTube", icon="video", url="https://www.youtube.com"),
    QuickLink(id="3", name="Wikipedia", icon="book", url="https://www.wikipedia.org"),
    QuickLink(id="4", name="Games", icon="gamepad", url="https://www.coolmathgames.com"),
    QuickLink(id="5", name="Weather", icon="cloud", url="https://www.weather.com"),
    QuickLink(id="6", name="News", icon="globe", url="https://news.google.com"),
]


def encode_component(text: str) -> str:
    """Percent-encode a whole string as one URL component (encodeURIComponent rules)."""
    return quote(text, safe="!*'()")


class HistorySink(Protocol):
    """Anything that can take a NavigationRecord (HistoryStore does)."""

    def append(self, record: NavigationRecord) -> None:
        ...


@dataclass(frozen=True)
class Resolution:
    target_url: str
    record: NavigationRecord


@dataclass(frozen=True)
class Navigation:
    proxy_url: str
    resolution: Resolution
    saved: bool


class NavigationResolver:
    def __init__(self, proxy_base: str = DEFAULT_PROXY_BASE, search_template: str = DEFAULT_SEARCH_TEMPLATE):
        self.proxy_base = proxy_base if proxy_base.endswith("/") else proxy_base + "/"
        self.search_template = search_template

    def search_url(self, phrase: str) -> str:
        return self.search_template.format(query=encode_component(phrase))

    def resolve(self, raw_input: str) -> Optional[Resolution]:
        """Resolve raw input into a target URL and a fresh history record.

        Returns None for empty/blank input; callers are expected not to
        submit it in the first place.
        """
        query = (raw_input or "").strip()
        if not query:
            return None

        url = query if classify(query).is_url else self.search_url(query)
        record = NavigationRecord(
            title=infer_title(url),
            url=url,
            icon=infer_icon(url),
        )
        return Resolution(target_url=url, record=record)

    def build_proxy_url(self, resolved_url: str) -> str:
        """Compose the outbound redirect. No validation beyond resolve()."""
        return f"{self.proxy_base}{encode_component(resolved_url)}"

    def go(
        self,
        raw_input: str,
        history: Optional[HistorySink] = None,
        settings: Optional[UserSettings] = None,
    ) -> Optional[Navigation]:
        """Resolve, record (when history saving is on) and build the proxy URL."""
        resolution = self.resolve(raw_input)
        if resolution is None:
            return None

        save_history = settings.saveHistory if settings is not None else True
        saved = history is not None and save_history
        if saved:
            history.append(resolution.record)

        logger.info(f"Navigating to {resolution.target_url}")
        return Navigation(
            proxy_url=self.build_proxy_url(resolution.target_url),
            resolution=resolution,
            saved=saved,
        )


def get_quick_link(link_id: str) -> Optional[QuickLink]:
    return next((link for link in QUICK_LINKS if link.id == link_id), None)
