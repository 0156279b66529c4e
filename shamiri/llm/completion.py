"""
Completion invoker.

One round-trip to the configured chat provider with fixed decoding
parameters. No retries: a failed call raises and the caller decides whether
to resend the same messages.
"""

from typing import List, Optional

from shamiri.errors import UpstreamError
from shamiri.llm.client_factory import get_chat_client
from shamiri.llm.providers.base import BaseLLMClient, ChatMessage
from server.config import config
from server.logging_config import get_logger

logger = get_logger(__name__)


class CompletionInvoker:
    def __init__(
        self,
        client: Optional[BaseLLMClient] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self._client = client
        self.temperature = config.LLM.TEMPERATURE if temperature is None else temperature
        self.max_tokens = config.LLM.MAX_TOKENS if max_tokens is None else max_tokens

    @property
    def client(self) -> BaseLLMClient:
        if self._client is None:
            self._client = get_chat_client()
        return self._client

    async def complete(self, messages: List[ChatMessage]) -> str:
        """
        Return the provider's newest answer for ``messages``.

        Raises:
            UpstreamError: the chat client could not be built from config, or
                the provider failed or returned no usable candidate.
        """
        try:
            client = self.client
        except ValueError as e:
            # Missing key or malformed LLM_SERVICE: nothing can be asked of the provider
            provider = config.LLM.LLM_SERVICE.split("/", 1)[0] or "unconfigured"
            logger.error(f"Chat client unavailable: {e}")
            raise UpstreamError(provider, str(e)) from e
        provider = client.get_provider_name()
        logger.debug(f"Requesting completion from {provider} with {len(messages)} messages")

        response = await client.chat(
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        if response is None or not response.content or not response.content.strip():
            raise UpstreamError(provider, "provider returned an empty answer")

        if response.usage:
            logger.info(f"Completion from {response.model}: {response.usage.get('completion_tokens')} tokens")
        return response.content.strip()
