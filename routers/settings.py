# Settings Router - per-profile settings, tab cloaking, and "clear all data"
from fastapi import APIRouter, Depends

from core.event_bus import event_bus
from core.schemas import TabCloaking, UserSettings
from core.settings_store import CLOAK_PRESETS, apply_cloak, clear_all_data
from shared.state import (
    get_cloak_store,
    get_document,
    get_history_store,
    get_retention_service,
    get_settings_store,
)

router = APIRouter(tags=["Settings"])


def _sync_retention(retention, settings: UserSettings):
    if retention.initialized:
        retention.sync(settings)


def _document_state(document):
    return {"title": document.title, "icon": document.icon, "iconUrl": document.icon_url}


# === SETTINGS API ENDPOINTS ===

@router.get("/settings")
async def get_settings(settings_store=Depends(get_settings_store)):
    """Current settings, or the defaults if none were saved."""
    return {"status": "success", "settings": settings_store.get().model_dump()}


@router.put("/settings")
async def update_settings(
    new_settings: UserSettings,
    settings_store=Depends(get_settings_store),
    retention=Depends(get_retention_service),
):
    """Replace the whole settings object (the client merges its form first)."""
    saved = settings_store.replace(new_settings)
    _sync_retention(retention, saved)
    if saved.enableNotifications:
        event_bus.notify("Settings Saved", "Your preferences have been updated", source="settings")
    return {"status": "success", "settings": saved.model_dump()}


@router.post("/settings/reset")
async def reset_to_defaults(settings_store=Depends(get_settings_store), retention=Depends(get_retention_service)):
    defaults = settings_store.reset()
    _sync_retention(retention, defaults)
    return {"status": "success", "message": "Settings reset to defaults", "settings": defaults.model_dump()}


# === TAB CLOAKING ===

@router.get("/cloak")
async def get_cloak(cloak_store=Depends(get_cloak_store)):
    return {"status": "success", "cloak": cloak_store.get().model_dump()}


@router.put("/cloak")
async def update_cloak(
    profile: TabCloaking,
    cloak_store=Depends(get_cloak_store),
    document=Depends(get_document),
    settings_store=Depends(get_settings_store),
):
    """Save the cloak profile, then apply it to the document."""
    saved = cloak_store.replace(profile)
    apply_cloak(saved, document)
    if settings_store.get().enableNotifications:
        event_bus.notify("Tab Cloaker", "Tab disguise applied successfully", source="cloak")
    return {"status": "success", "cloak": saved.model_dump(), "document": _document_state(document)}


@router.get("/cloak/presets")
async def get_cloak_presets():
    return {"status": "success", "presets": [p.model_dump(exclude_none=True) for p in CLOAK_PRESETS]}


@router.get("/cloak/document")
async def get_document_state(document=Depends(get_document)):
    """What the hosting page should show as its title and icon."""
    return {"status": "success", "document": _document_state(document)}


# === DATA ===

@router.post("/data/clear")
async def clear_data(
    history=Depends(get_history_store),
    settings_store=Depends(get_settings_store),
    cloak_store=Depends(get_cloak_store),
    document=Depends(get_document),
    retention=Depends(get_retention_service),
):
    """Clear history and restore default settings and cloak profile."""
    clear_all_data(history, settings_store, cloak_store, document)
    _sync_retention(retention, settings_store.get())
    event_bus.notify("Data Cleared", "All local data has been cleared", source="settings")
    return {"status": "success", "document": _document_state(document)}
