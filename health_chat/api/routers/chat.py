"""
Chat router - talk to the health assistant and read transcripts.

Each POST stores the message and the reply as one exchange and returns the
latest turns of the session.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path

from health_chat.core.dependencies import get_chat_service
from health_chat.schemas import ChatRequest, ChatResponse, ConversationTurnResponse
from health_chat.services import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/chat",
    tags=["Chat"],
)


@router.post(
    "",
    response_model=ChatResponse,
    summary="Send a message to the assistant",
    description="The reply is based on the user's recorded measurements. "
                "`conversation` holds at most the 10 most recent turns."
)
async def send_message(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service)
):
    result = chat_service.chat(
        user_key=request.user_id,
        session_key=request.session_id,
        text=request.message
    )
    return ChatResponse(
        response=result.reply,
        session_id=request.session_id,
        conversation=[ConversationTurnResponse.model_validate(turn) for turn in result.conversation],
    )


@router.get(
    "/history/{session_id}",
    response_model=List[ConversationTurnResponse],
    summary="Full transcript of a session",
    description="Unknown sessions return an empty list."
)
async def conversation_history(
    session_id: str = Path(..., min_length=1, max_length=200),
    chat_service: ChatService = Depends(get_chat_service)
):
    return [ConversationTurnResponse.model_validate(turn) for turn in chat_service.history(session_id)]
