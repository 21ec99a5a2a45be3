from fastapi import APIRouter, Depends
from estatehub.api.deps import get_chat_service
from estatehub.core.exceptions import AppError, InternalError
from estatehub.models.chat import ChatReply, ChatRequest
from estatehub.models.common import ApiResponse
from estatehub.modules.chat.service import ChatService
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ApiResponse[ChatReply])
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service)
):
    """Forward the visitor's conversation to the assistant and return its reply."""
    try:
        reply = await chat_service.reply(request.messages, request.system_prompt)
        return ApiResponse[ChatReply](data=reply)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Chat request failed: {e}")
        raise InternalError("Failed to get response")
