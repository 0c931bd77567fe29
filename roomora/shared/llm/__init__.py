"""LLM client utilities."""

from roomora.shared.llm.client import create_client, get_cached_client, call_llm

__all__ = ["create_client", "get_cached_client", "call_llm"]
