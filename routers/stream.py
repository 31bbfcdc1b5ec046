import asyncio
import json

from fastapi import APIRouter, Query, Request
from sse_starlette.sse import EventSourceResponse

from core.event_bus import event_bus

router = APIRouter(tags=["Stream"])


@router.get("/events")
async def event_stream(request: Request):
    """
    Server-Sent Events (SSE) endpoint.
    The page connects here to show toast notifications.
    """
    queue = event_bus.subscribe()

    async def event_generator():
        try:
            while True:
                if await request.is_disconnected():
                    break

                event = await queue.get()
                yield {
                    "event": event["type"],
                    "data": json.dumps(event)
                }
        except asyncio.CancelledError:
            pass
        finally:
            event_bus.unsubscribe(queue)

    return EventSourceResponse(event_generator())


@router.get("/notifications/recent")
async def recent_notifications(limit: int = Query(10, ge=1, le=50)):
    return {"status": "success", "notifications": event_bus.recent(limit)}
