"""
Anthropic LLM client implementation.
"""

import anthropic
from anthropic import APIConnectionError, APIStatusError, AnthropicError
from typing import List, Optional
from .base import BaseLLMClient, ChatMessage, ChatResponse, Role
from shamiri.errors import UpstreamError
from server.logging_config import get_logger

logger = get_logger(__name__)


class AnthropicClient(BaseLLMClient):
    """Anthropic LLM client"""

    def __init__(self, api_key: str, chat_model: str = "claude-3-5-haiku-20241022", timeout: float = 60.0, **kwargs):
        super().__init__(model_name=chat_model, **kwargs)
        self.api_key = api_key
        self.chat_model = chat_model

        self.client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)

    async def chat(
        self,
        messages: List[ChatMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> ChatResponse:
        """Generate chat completion using Anthropic API"""
        # Anthropic requires system message to be separate
        system_message = None
        anthropic_messages = []

        for msg in messages:
            if msg.role == Role.SYSTEM:
                system_message = msg.content
            else:
                anthropic_messages.append({
                    "role": msg.role.value,
                    "content": msg.content
                })

        request_params = {
            "model": self.chat_model,
            "messages": anthropic_messages,
            "temperature": temperature,
            "max_tokens": max_tokens or 1000,
        }

        if system_message:
            request_params["system"] = system_message

        request_params.update(kwargs)

        try:
            response = await self.client.messages.create(**request_params)
        except APIStatusError as e:
            logger.error(f"Anthropic chat error {e.status_code}: {e}")
            raise UpstreamError("anthropic", str(e), status_code=e.status_code) from e
        except APIConnectionError as e:
            logger.error(f"Anthropic unreachable: {e}")
            raise UpstreamError("anthropic", f"connection failed: {e}") from e
        except AnthropicError as e:
            logger.error(f"Anthropic chat error: {e}")
            raise UpstreamError("anthropic", str(e)) from e

        texts = [block.text for block in response.content if getattr(block, "type", None) == "text"]
        if not texts or not texts[0].strip():
            raise UpstreamError("anthropic", "response contained no text candidate")

        return ChatResponse(
            content=texts[0],
            model=response.model,
            usage=response.usage.model_dump() if response.usage else None
        )

    def get_provider_name(self) -> str:
        return "anthropic"

    async def close(self) -> None:
        try:
            await self.client.close()
        except Exception as e:
            logger.debug(f"Anthropic client close failed: {e}")
