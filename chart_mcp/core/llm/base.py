from abc import ABC, abstractmethod

from chart_mcp.core.llm.schemas import GenerateConfig, LLMResponse


class BaseLLM(ABC):
    @abstractmethod
    def generate(self, messages: list[dict], config: GenerateConfig | None = None) -> LLMResponse:
        """Generate a response from the LLM based on the provided messages."""
        pass

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        config: GenerateConfig | None = None,
    ) -> str:
        """Run a single system + user exchange and return the raw response text."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        response = self.generate(messages=messages, config=config)
        return response.text or ""
