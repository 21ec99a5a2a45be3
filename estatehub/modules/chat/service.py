"""
Chat assistant proxy for the public site.
"""
import logging
from typing import List, Optional

import httpx

from estatehub.core.config import settings
from estatehub.core.exceptions import ChatError, ValidationError
from estatehub.models.chat import ChatMessage, ChatReply, ChatRole

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant for a real-estate listing website."


class ChatService:
    """Forwards a conversation to an OpenAI-compatible chat-completions endpoint"""

    def __init__(self, api_key: str, api_url: str, model: str = "gpt-3.5-turbo",
                 client: Optional[httpx.AsyncClient] = None,
                 max_tokens: int = 500, temperature: float = 0.7):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client = client or httpx.AsyncClient(timeout=60.0)

    @classmethod
    def from_settings(cls) -> "ChatService":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            api_url=settings.OPENAI_API_URL,
            model=settings.OPENAI_MODEL,
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def reply(self, messages: List[ChatMessage], system_prompt: Optional[str] = None) -> ChatReply:
        if not messages:
            raise ValidationError("Please provide at least one message")
        if not self.api_key:
            raise ChatError("Chat assistant is not configured")

        payload = {
            "model": self.model,
            "messages": [{"role": ChatRole.SYSTEM.value, "content": system_prompt or DEFAULT_SYSTEM_PROMPT}]
            + [{"role": m.role.value, "content": m.content} for m in messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

        try:
            response = await self.client.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"}
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            logger.error(f"Chat completion failed with HTTP {e.response.status_code}: {e.response.text}")
            raise ChatError("Failed to get response", detail=f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            logger.error(f"Chat completion request error: {e}")
            raise ChatError("Failed to get response", detail=str(e))
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected chat completion payload: {e}")
            raise ChatError("Failed to get response", detail="unexpected response payload")

        return ChatReply(content=content or "")
