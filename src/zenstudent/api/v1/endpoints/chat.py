"""
Chat Endpoints

Conversation log and message sending.

PRIVACY: Message text is returned to the user but never logged here.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from zenstudent.api.dependencies import get_coordinator
from zenstudent.domain.enums.conversation import MessageRole
from zenstudent.domain.models.chat_message import ChatMessage
from zenstudent.services.session import SessionCoordinator

router = APIRouter()


class MessageResponse(BaseModel):
    """One entry of the conversation log."""

    id: str
    role: MessageRole
    text: str
    created_at: datetime
    risk_flag: bool

    @classmethod
    def from_message(cls, message: ChatMessage) -> "MessageResponse":
        return cls(
            id=message.id,
            role=message.role,
            text=message.text,
            created_at=message.created_at,
            risk_flag=message.risk_flag,
        )


class SendMessageRequest(BaseModel):
    """Outgoing user message."""

    text: str = Field(..., max_length=4000, description="Message text")


class SendMessageResponse(BaseModel):
    """User message as stored, the reply, and the resulting crisis banner."""

    message: MessageResponse
    reply: MessageResponse
    crisis_active: bool
    alert_text: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": {
                    "id": "5f2b...",
                    "role": "user",
                    "text": "I can't focus before my exam",
                    "created_at": "2024-05-01T10:00:00+00:00",
                    "risk_flag": False,
                },
                "reply": {
                    "id": "9a1c...",
                    "role": "assistant",
                    "text": "That sounds stressful. Want to try 4-6 breathing together?",
                    "created_at": "2024-05-01T10:00:02+00:00",
                    "risk_flag": False,
                },
                "crisis_active": False,
                "alert_text": None,
            }
        },
    )


@router.get(
    "/messages",
    response_model=list[MessageResponse],
    summary="Conversation log, oldest first",
)
async def list_messages(
    coordinator: SessionCoordinator = Depends(get_coordinator),
) -> list[MessageResponse]:
    return [MessageResponse.from_message(m) for m in coordinator.messages]


@router.post(
    "/messages",
    response_model=SendMessageResponse,
    summary="Send a message and wait for the reply",
    responses={
        409: {"description": "A reply is already being generated"},
        422: {"description": "Empty message"},
    },
)
async def send_message(
    request: SendMessageRequest,
    coordinator: SessionCoordinator = Depends(get_coordinator),
) -> SendMessageResponse:
    """
    Send one message.

    Only one message can be awaiting a reply at a time.
    """
    if coordinator.in_flight:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reply is already being generated",
        )

    reply = await coordinator.send(request.text)
    if reply is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Message text must not be empty",
        )

    messages = coordinator.messages
    index = messages.index(reply)
    user_message = next(
        m for m in reversed(messages[:index]) if m.role == MessageRole.USER
    )

    crisis = coordinator.crisis
    return SendMessageResponse(
        message=MessageResponse.from_message(user_message),
        reply=MessageResponse.from_message(reply),
        crisis_active=crisis.active,
        alert_text=crisis.alert_text,
    )
