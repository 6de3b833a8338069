from openai import OpenAI

from chart_mcp.core.llm.base import BaseLLM
from chart_mcp.core.llm.schemas import GenerateConfig, LLMResponse


class OpenAIProvider(BaseLLM):
    """Any OpenAI-compatible chat completions endpoint (OpenAI, DeepSeek, ...)."""

    def __init__(self, api_key: str, model: str, base_url: str | None = None):
        self._client = OpenAI(api_key=api_key, base_url=base_url or None)
        self._model = model

    def _build_params(self, messages: list[dict], config: GenerateConfig) -> dict:
        params = {
            "model": self._model,
            "messages": messages,
            "temperature": config.temperature,
            "top_p": config.top_p,
        }
        if config.max_tokens is not None:
            params["max_tokens"] = config.max_tokens
        if config.stop is not None:
            params["stop"] = config.stop
        if config.response_format is not None:
            params["response_format"] = {"type": config.response_format}
        return params

    def generate(self, messages: list[dict], config: GenerateConfig | None = None) -> LLMResponse:
        config = config or GenerateConfig()

        response = self._client.chat.completions.create(
            **self._build_params(messages, config),
        )
        usage = {}
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }
        return LLMResponse(
            text=response.choices[0].message.content or "",
            usage=usage,
        )
