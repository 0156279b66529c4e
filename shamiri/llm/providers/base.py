"""
Base interface for chat completion providers.
All LLM clients must implement this interface for consistency.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Dict, Any, Optional
from pydantic import BaseModel


class Role(str, Enum):
    """The only roles a message may carry. SYSTEM holds the instruction."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Standard chat message format"""
    role: Role
    content: str


class ChatResponse(BaseModel):
    """Standard chat response format"""
    content: str
    model: str
    usage: Optional[Dict[str, Any]] = None


class BaseLLMClient(ABC):
    """Base interface for all chat completion clients"""

    def __init__(self, **kwargs):
        self.model_name = kwargs.get('model_name', 'default')

    @abstractmethod
    async def chat(
        self,
        messages: List[ChatMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> ChatResponse:
        """
        Generate a chat completion response.

        Args:
            messages: List of chat messages
            temperature: Sampling temperature (0.0 to 1.0)
            max_tokens: Maximum tokens in response
            **kwargs: Additional provider-specific parameters

        Returns:
            ChatResponse object with content and metadata

        Raises:
            UpstreamError: transport failure, error status, or no usable candidate
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of the provider (e.g., 'openai', 'openrouter', 'anthropic')"""
        pass

    async def close(self) -> None:
        """Release network resources held by the client."""
        pass
