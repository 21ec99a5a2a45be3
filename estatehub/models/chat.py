from typing import List, Optional
from enum import Enum

from estatehub.models.common import CamelModel


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(CamelModel):
    role: ChatRole
    content: str


class ChatRequest(CamelModel):
    messages: List[ChatMessage] = []
    system_prompt: Optional[str] = None


class ChatReply(CamelModel):
    content: str
