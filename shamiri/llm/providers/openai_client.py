"""
OpenAI-compatible chat client implementations (OpenAI and OpenRouter).
"""

import openai
from openai import APIConnectionError, APIStatusError, OpenAIError
from typing import List, Dict, Optional
from .base import BaseLLMClient, ChatMessage, ChatResponse
from shamiri.errors import UpstreamError
from server.logging_config import get_logger

logger = get_logger(__name__)


class OpenAIClient(BaseLLMClient):
    """OpenAI LLM client"""

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        chat_model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        default_headers: Optional[Dict[str, str]] = None,
        timeout: float = 60.0,
        **kwargs
    ):
        super().__init__(model_name=chat_model, **kwargs)
        self.api_key = api_key
        self.chat_model = chat_model
        self.base_url = base_url

        client_kwargs = {"api_key": api_key, "timeout": timeout, "max_retries": 0}
        if base_url:
            client_kwargs["base_url"] = base_url
        if default_headers:
            client_kwargs["default_headers"] = default_headers
        self.async_client = openai.AsyncOpenAI(**client_kwargs)

    async def chat(
        self,
        messages: List[ChatMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> ChatResponse:
        """Generate chat completion using an OpenAI-compatible API"""
        # Convert our standard message format to OpenAI format
        openai_messages = [
            {"role": msg.role.value, "content": msg.content}
            for msg in messages
        ]

        request_params = {
            "model": self.chat_model,
            "messages": openai_messages,
            "temperature": temperature,
        }

        if max_tokens:
            request_params["max_tokens"] = max_tokens

        request_params.update(kwargs)

        try:
            response = await self.async_client.chat.completions.create(**request_params)
        except APIStatusError as e:
            logger.error(f"{self.provider} chat error {e.status_code}: {e}")
            raise UpstreamError(self.provider, str(e), status_code=e.status_code) from e
        except APIConnectionError as e:
            logger.error(f"{self.provider} unreachable: {e}")
            raise UpstreamError(self.provider, f"connection failed: {e}") from e
        except OpenAIError as e:
            logger.error(f"{self.provider} chat error: {e}")
            raise UpstreamError(self.provider, str(e)) from e

        if not response.choices:
            raise UpstreamError(self.provider, "response contained no candidates")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise UpstreamError(self.provider, "first candidate was empty")

        return ChatResponse(
            content=content,
            model=response.model or self.chat_model,
            usage=response.usage.model_dump() if response.usage else None
        )

    def get_provider_name(self) -> str:
        return self.provider

    async def close(self) -> None:
        try:
            await self.async_client.close()
        except Exception as e:
            logger.debug(f"{self.provider} async client close failed: {e}")


class OpenRouterClient(OpenAIClient):
    """OpenRouter speaks the OpenAI wire format; only the endpoint and attribution headers differ."""

    provider = "openrouter"

    def __init__(
        self,
        api_key: str,
        chat_model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        referer: Optional[str] = None,
        title: Optional[str] = None,
        **kwargs
    ):
        headers = {}
        if referer:
            headers["HTTP-Referer"] = referer
        if title:
            headers["X-Title"] = title
        super().__init__(
            api_key=api_key,
            chat_model=chat_model,
            base_url=base_url,
            default_headers=headers or None,
            **kwargs
        )
