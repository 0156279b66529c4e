"""
LLM Client Factory for managing chat completion providers.
"""

from typing import Optional, Tuple
from .providers.base import BaseLLMClient
from .providers.openai_client import OpenAIClient, OpenRouterClient
from .providers.anthropic_client import AnthropicClient
from server.config import config
from server.logging_config import get_logger

logger = get_logger(__name__)

# Global client instance
_chat_client: Optional[BaseLLMClient] = None


def parse_llm_service(llm_service: str) -> Tuple[str, str]:
    """
    Parse LLM_SERVICE string into provider and model.

    Args:
        llm_service: String in format "provider/model" (e.g., "openrouter/openai/gpt-4o-mini")

    Returns:
        Tuple of (provider, model). The model keeps any further slashes.
    """
    if "/" not in llm_service:
        raise ValueError(f"Invalid LLM_SERVICE format: {llm_service}. Expected 'provider/model'")

    provider, model = llm_service.split("/", 1)
    if not model:
        raise ValueError(f"Invalid LLM_SERVICE format: {llm_service}. Model is missing")
    return provider.lower(), model


def create_openrouter_client(model: str) -> OpenRouterClient:
    """Create OpenRouter client"""
    if not config.LLM.OPENROUTER_API_KEY:
        raise ValueError("OPENROUTER_API_KEY is required for OpenRouter provider")

    return OpenRouterClient(
        api_key=config.LLM.OPENROUTER_API_KEY,
        chat_model=model,
        base_url=config.LLM.OPENROUTER_BASE_URL,
        referer=config.LLM.OPENROUTER_REFERER,
        title=config.LLM.OPENROUTER_TITLE,
        timeout=config.LLM.REQUEST_TIMEOUT,
    )


def create_openai_client(model: str) -> OpenAIClient:
    """Create OpenAI client"""
    if not config.LLM.OPENAI_API_KEY:
        raise ValueError("OPENAI_API_KEY is required for OpenAI provider")

    return OpenAIClient(
        api_key=config.LLM.OPENAI_API_KEY,
        chat_model=model,
        timeout=config.LLM.REQUEST_TIMEOUT,
    )


def create_anthropic_client(model: str) -> AnthropicClient:
    """Create Anthropic client"""
    if not config.LLM.ANTHROPIC_API_KEY:
        raise ValueError("ANTHROPIC_API_KEY is required for Anthropic provider")

    return AnthropicClient(
        api_key=config.LLM.ANTHROPIC_API_KEY,
        chat_model=model,
        timeout=config.LLM.REQUEST_TIMEOUT,
    )


def create_client(provider: str, model: str) -> BaseLLMClient:
    """
    Create a client for the specified provider.

    Args:
        provider: Provider name (openrouter, openai, anthropic)
        model: Model identifier understood by that provider

    Returns:
        BaseLLMClient instance
    """
    if provider == "openrouter":
        return create_openrouter_client(model)
    elif provider == "openai":
        return create_openai_client(model)
    elif provider == "anthropic":
        return create_anthropic_client(model)
    else:
        raise ValueError(f"Unsupported provider: {provider}. Supported: openrouter, openai, anthropic")


def get_chat_client() -> BaseLLMClient:
    """
    Get the chat client based on current configuration.

    Returns:
        BaseLLMClient instance for chat operations
    """
    global _chat_client

    if _chat_client is None:
        if not config.LLM.LLM_SERVICE:
            raise ValueError("LLM_SERVICE is required but not configured. Set LLM_SERVICE in .env file (e.g., LLM_SERVICE=openrouter/openai/gpt-4o-mini)")

        provider, model = parse_llm_service(config.LLM.LLM_SERVICE)
        _chat_client = create_client(provider, model)
        logger.info(f"Initialized chat client: {provider}/{model}")

    return _chat_client


async def close_clients():
    """Close and forget the shared chat client (called at shutdown)."""
    global _chat_client
    if _chat_client is not None:
        await _chat_client.close()
    _chat_client = None


def reset_clients():
    """Reset client instances (useful for testing)"""
    global _chat_client
    _chat_client = None
