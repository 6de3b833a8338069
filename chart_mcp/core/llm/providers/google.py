import google.generativeai as genai

from chart_mcp.core.llm.base import BaseLLM
from chart_mcp.core.llm.schemas import GenerateConfig, LLMResponse

JSON_MIME_TYPE = "application/json"


class GoogleProvider(BaseLLM):
    """Gemini models; a base URL is passed to the client as its API endpoint."""

    def __init__(self, api_key: str, model: str, base_url: str | None = None):
        client_options = {"api_endpoint": base_url} if base_url else None
        genai.configure(api_key=api_key, client_options=client_options)
        self._model = model

    @staticmethod
    def _split_messages(messages: list[dict]) -> tuple[str | None, list[dict]]:
        system_parts = [str(m["content"]) for m in messages if m.get("role") == "system" and m.get("content")]
        history = [
            {
                "role": "model" if message.get("role") == "assistant" else "user",
                "parts": [str(message.get("content", ""))],
            }
            for message in messages
            if message.get("role") != "system"
        ]
        return ("\n\n".join(system_parts) or None), history

    def _build_config(self, config: GenerateConfig) -> genai.types.GenerationConfig:
        params: dict = {
            "temperature": config.temperature,
            "top_p": config.top_p,
        }
        if config.max_tokens is not None:
            params["max_output_tokens"] = config.max_tokens
        if config.stop is not None:
            params["stop_sequences"] = config.stop
        if config.response_format == "json_object":
            params["response_mime_type"] = JSON_MIME_TYPE
        return genai.types.GenerationConfig(**params)

    @staticmethod
    def _usage(response) -> dict:
        metadata = getattr(response, "usage_metadata", None)
        if not metadata:
            return {}
        return {
            "prompt_tokens": metadata.prompt_token_count,
            "completion_tokens": metadata.candidates_token_count,
            "total_tokens": metadata.total_token_count,
        }

    def generate(self, messages: list[dict], config: GenerateConfig | None = None) -> LLMResponse:
        config = config or GenerateConfig()
        system_instruction, history = self._split_messages(messages)
        model = genai.GenerativeModel(self._model, system_instruction=system_instruction)
        response = model.generate_content(
            history or "",
            generation_config=self._build_config(config),
        )
        return LLMResponse(text=getattr(response, "text", "") or "", usage=self._usage(response))
