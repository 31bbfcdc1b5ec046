# Navigation Router - "go" actions, proxy target lookup, quick links
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from core.event_bus import event_bus
from core.navigation import QUICK_LINKS, get_quick_link
from shared.state import get_history_store, get_resolver, get_settings_store

router = APIRouter(tags=["Navigation"])


class NavigateRequest(BaseModel):
    query: str


def _go(query, resolver, history, settings_store):
    settings = settings_store.get()
    navigation = resolver.go(query, history, settings)
    if navigation is None:
        raise HTTPException(status_code=400, detail="Enter a URL or search phrase")

    if settings.enableNotifications:
        event_bus.notify("Launching Proxy", f"Navigating to: {query.strip()}", source="navigation")

    return {
        "status": "success",
        "proxyUrl": navigation.proxy_url,
        "targetUrl": navigation.resolution.target_url,
        "record": navigation.resolution.record.model_dump(mode="json"),
        "saved": navigation.saved,
    }


@router.post("/navigate")
async def navigate(
    request: NavigateRequest,
    resolver=Depends(get_resolver),
    history=Depends(get_history_store),
    settings_store=Depends(get_settings_store),
):
    """Resolve a URL or search phrase into the proxy redirect target."""
    return _go(request.query, resolver, history, settings_store)


@router.get("/proxy")
async def proxy_target(url: Optional[str] = None, resolver=Depends(get_resolver)):
    """Return the proxy address for an already-resolved URL."""
    if not url:
        raise HTTPException(status_code=400, detail="Missing URL parameter")
    return {
        "status": "success",
        "proxyUrl": resolver.build_proxy_url(url),
        "message": "Ready to proxy the request",
    }


@router.get("/quick-links")
async def list_quick_links():
    return {"status": "success", "links": [link.model_dump() for link in QUICK_LINKS]}


@router.post("/quick-links/{link_id}/open")
async def open_quick_link(
    link_id: str,
    resolver=Depends(get_resolver),
    history=Depends(get_history_store),
    settings_store=Depends(get_settings_store),
):
    link = get_quick_link(link_id)
    if link is None:
        raise HTTPException(status_code=404, detail="Quick link not found")
    return _go(link.url, resolver, history, settings_store)
