# Support Router - AI support chat with human-escalation triage
from fastapi import APIRouter, Depends, HTTPException

from core.schemas import ChatRequest
from core.support_triage import ProviderNotConfiguredError, ProviderUnavailableError
from shared.state import get_support_triage

router = APIRouter(prefix="/support", tags=["Support"])


@router.get("/status")
async def get_support_status(triage=Depends(get_support_triage)):
    """Whether AI support has a configured provider."""
    return {"status": "success", "configured": triage.is_ready()}


@router.post("/ai-chat")
async def ai_chat(request: ChatRequest, triage=Depends(get_support_triage)):
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    try:
        reply = await triage.process_chat_message(request.message, request.previousMessages)
    except ProviderNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ProviderUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return reply.model_dump()
