from typing import Dict, Tuple

from chart_mcp.core.config import Settings, settings as default_settings
from chart_mcp.core.llm.base import BaseLLM
from chart_mcp.core.llm.providers.anthropic import AnthropicProvider
from chart_mcp.core.llm.providers.google import GoogleProvider
from chart_mcp.core.llm.providers.openai import OpenAIProvider


PROVIDER_ALIASES = {
    "deepseek": "openai",
    "gemini": "google",
    "claude": "anthropic",
}

LLM_REGISTRY = {
    "openai": OpenAIProvider,
    "google": GoogleProvider,
    "anthropic": AnthropicProvider,
}


# cache instance per (provider, model, base_url)
_instances: Dict[Tuple[str, str, str], BaseLLM] = {}


def normalize_provider(provider: str) -> str:
    provider = (provider or "").strip().lower()
    return PROVIDER_ALIASES.get(provider, provider)


def create_llm(
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    base_url: str | None = None,
    settings: Settings | None = None,
    use_cache: bool = True,
) -> BaseLLM:
    settings = settings or default_settings

    provider = normalize_provider(provider or settings.LLM_PROVIDER)
    model = model or settings.AI_MODEL
    api_key = api_key or settings.API_KEY
    base_url = base_url if base_url is not None else settings.BASE_URL

    if provider not in LLM_REGISTRY:
        raise ValueError(f"Unsupported LLM provider: {provider}")
    if not model:
        raise ValueError("Missing model identifier. Set AI_MODEL in env.")
    if not api_key:
        raise ValueError(f"Missing API key for provider '{provider}'. Set API_KEY in env.")
    key = (provider, model, base_url or "")

    if use_cache and key in _instances:
        return _instances[key]

    llm_class = LLM_REGISTRY[provider]

    instance = llm_class(
        api_key=api_key,
        model=model,
        base_url=base_url or None,
    )

    if use_cache:
        _instances[key] = instance

    return instance


def clear_llm_cache() -> None:
    """Clear cached LLM instances so next call picks up new config."""
    _instances.clear()
