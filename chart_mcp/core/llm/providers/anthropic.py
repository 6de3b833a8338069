from anthropic import Anthropic

from chart_mcp.core.llm.base import BaseLLM
from chart_mcp.core.llm.schemas import GenerateConfig, LLMResponse

JSON_ONLY_INSTRUCTION = "Respond with a single JSON object and nothing else."


class AnthropicProvider(BaseLLM):
    def __init__(self, api_key: str, model: str, base_url: str | None = None):
        self._client = Anthropic(api_key=api_key, base_url=base_url or None)
        self._model = model

    def _split_messages(self, messages: list[dict]) -> tuple[str | None, list[dict]]:
        system_parts: list[str] = []
        history: list[dict] = []

        for message in messages:
            role = message.get("role")
            content = message.get("content", "")
            if role == "system":
                if content:
                    system_parts.append(str(content))
                continue
            if role == "assistant":
                history.append({"role": "assistant", "content": str(content)})
            else:
                history.append({"role": "user", "content": str(content)})

        system_text = "\n\n".join(system_parts) if system_parts else None
        return system_text, history

    def _build_params(self, config: GenerateConfig) -> dict:
        params: dict = {
            "temperature": config.temperature,
            "top_p": config.top_p,
            "max_tokens": config.max_tokens or 4096,
        }
        if config.stop is not None:
            params["stop_sequences"] = config.stop
        return params

    def generate(self, messages: list[dict], config: GenerateConfig | None = None) -> LLMResponse:
        config = config or GenerateConfig()
        system_text, history = self._split_messages(messages)
        # No native JSON mode; ask for it in the system prompt instead.
        if config.response_format == "json_object":
            system_text = f"{system_text}\n\n{JSON_ONLY_INSTRUCTION}" if system_text else JSON_ONLY_INSTRUCTION

        params = self._build_params(config)
        if system_text:
            params["system"] = system_text

        response = self._client.messages.create(
            model=self._model,
            messages=history,
            **params,
        )

        text_parts = []
        for block in response.content:
            if getattr(block, "text", None):
                text_parts.append(block.text)

        usage = {}
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
            }

        return LLMResponse(text="".join(text_parts), usage=usage)
