# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Description: chat.py
# -----------------------------------------------------------------------------
import json
import logging
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from api.dependencies import get_chat_service
from api.schemas.chat import ChatRequest, ChatResponse, ClearHistoryResponse
from services.ShopChatService import ShopChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _sse(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


@router.post("", response_model=ChatResponse)
def post_chat(
        req: ChatRequest,
        svc: ShopChatService = Depends(get_chat_service),
) -> ChatResponse:
    message = (req.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="message must not be empty")

    logger.info("POST /api/chat (start) message_len=%d voice=%s", len(message), req.is_voice_input)

    out = svc.process_message(message, is_voice_input=req.is_voice_input, session_id=req.session_id)

    logger.info("POST /api/chat (done) intent=%s response_len=%d", out["intent"], len(out["response"]))

    return ChatResponse(
        response=out["response"],
        intent=out["intent"],
        session_id=out["session_id"],
        is_voice_input=req.is_voice_input,
        products=out.get("products") or [],
    )


@router.post("/stream")
def post_chat_stream(
        req: ChatRequest,
        svc: ShopChatService = Depends(get_chat_service),
) -> StreamingResponse:
    message = (req.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="message must not be empty")

    logger.info("POST /api/chat/stream (start) message_len=%d", len(message))

    def events() -> Iterator[str]:
        parts = []
        try:
            for chunk in svc.stream_message(message, is_voice_input=req.is_voice_input, session_id=req.session_id):
                parts.append(chunk)
                yield _sse({"chunk": chunk})
            yield _sse({"done": True, "full_response": "".join(parts)})
        except Exception as e:
            logger.exception("POST /api/chat/stream failed: %s", e)
            yield _sse({"error": "Stream error"})
        logger.info("POST /api/chat/stream (done) response_len=%d", sum(len(p) for p in parts))

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.delete("/history", response_model=ClearHistoryResponse)
def clear_chat_history(
        session_id: str = Query("default", min_length=1),
        svc: ShopChatService = Depends(get_chat_service),
) -> ClearHistoryResponse:
    svc.clear_history(session_id)
    return ClearHistoryResponse(session_id=session_id, message="Conversation history cleared")
