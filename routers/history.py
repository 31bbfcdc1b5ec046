# History Router - recent activity list
from fastapi import APIRouter, Depends, HTTPException

from core.event_bus import event_bus
from shared.state import get_history_store, get_settings_store

router = APIRouter(prefix="/history", tags=["History"])


@router.get("")
async def list_history(history=Depends(get_history_store)):
    """Most-recent-first navigation log."""
    items = [r.model_dump(mode="json") for r in history.list()]
    return {"status": "success", "history": items}


@router.delete("")
async def clear_history(history=Depends(get_history_store), settings_store=Depends(get_settings_store)):
    history.clear()
    if settings_store.get().enableNotifications:
        event_bus.notify("History Cleared", "Your browsing history has been cleared", source="history")
    return {"status": "success"}


@router.get("/{record_id}")
async def get_history_item(record_id: str, history=Depends(get_history_store)):
    record = history.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="History entry not found")
    return {"status": "success", "record": record.model_dump(mode="json")}


@router.delete("/{record_id}")
async def remove_history_item(record_id: str, history=Depends(get_history_store)):
    """Remove one entry. Unknown ids succeed without changing anything."""
    history.remove(record_id)
    return {"status": "success"}
