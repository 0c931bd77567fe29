"""
OpenAI-compatible client for the optional copy service.

The copy service only rewrites replies the conversation engine has already
computed, so it is called once per turn with a single timeout and no retries.
Any OpenAI-compatible endpoint works (OpenAI, Mistral, a local gateway).
"""

from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from roomora.shared.config import Settings, get_settings
from roomora.shared.errors import ProviderUnavailable


# Module-level cache for the copy client
_client: Optional[OpenAI] = None


def create_client(settings: Settings) -> Optional[OpenAI]:
    """
    Build a copy-service client from settings.

    Args:
        settings: Runtime settings

    Returns:
        Configured OpenAI client, or None when no API key is configured
    """
    if not settings.copy_enabled:
        return None

    return OpenAI(
        api_key=settings.copy_api_key,
        base_url=settings.copy_base_url,
        timeout=settings.copy_timeout,
        max_retries=0,
    )


def get_cached_client() -> Optional[OpenAI]:
    """
    Returns a cached copy-service client, or None if the service is unconfigured.

    The client is created once from the process settings and reused.
    """
    global _client
    if _client is None:
        _client = create_client(get_settings())
    return _client


def call_llm(
    messages: List[Dict[str, str]],
    model: str,
    client: OpenAI,
    temperature: float = 0.7,
    max_tokens: int = 300,
) -> str:
    """
    Call the chat completion endpoint once.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier to use
        client: OpenAI client instance
        temperature: Sampling temperature
        max_tokens: Completion token cap

    Returns:
        The assistant's response content as a string.

    Raises:
        ProviderUnavailable: If the request fails or returns no content
    """
    try:
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
    except OpenAIError as e:
        raise ProviderUnavailable("copy", str(e)) from e
    except Exception as e:
        # Injected OpenAI-compatible clients may raise their own error types
        raise ProviderUnavailable("copy", f"{type(e).__name__}: {e}") from e

    choices = getattr(response, "choices", None)
    if not choices:
        raise ProviderUnavailable("copy", "empty completion")

    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content.strip():
        raise ProviderUnavailable("copy", "empty completion")

    return content.strip()
