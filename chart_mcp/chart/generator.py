import json
import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from chart_mcp.chart.prompts import CHART_OPTION_SYSTEM, CHART_OPTION_USER
from chart_mcp.chart.schemas import ChartOption
from chart_mcp.core.errors import GenerationError
from chart_mcp.core.llm.base import BaseLLM
from chart_mcp.core.llm.schemas import GenerateConfig
from chart_mcp.data.schemas import LoadedData

logger = logging.getLogger(__name__)

CHART_TEMPERATURE = 0.7

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?(.*?)```", re.DOTALL | re.IGNORECASE)


class ChartGenerator:
    def __init__(self, llm: BaseLLM, temperature: float = CHART_TEMPERATURE):
        self.llm = llm
        self.temperature = temperature

    @staticmethod
    def _strip_json_fence(raw_text: str) -> str:
        raw = raw_text.strip()
        match = _FENCE_RE.search(raw)
        if match:
            return match.group(1).strip()
        # unterminated or stray fence markers
        return raw.replace("```json", "").replace("```", "").strip()

    @staticmethod
    def _strip_think_tags(raw_text: str) -> str:
        cleaned = re.sub(r"<think>.*?</think>", "", raw_text, flags=re.DOTALL)
        return cleaned.strip()

    @staticmethod
    def _serialize_data(data_source: Any) -> str:
        if isinstance(data_source, LoadedData):
            data_source = data_source.to_payload()
        return json.dumps(data_source, ensure_ascii=False, default=str)

    def build_prompts(self, data_source: Any, prompt: str) -> tuple[str, str]:
        user_prompt = CHART_OPTION_USER.format(
            data=self._serialize_data(data_source),
            prompt=prompt,
        )
        return CHART_OPTION_SYSTEM, user_prompt

    def _decode(self, raw_text: str) -> Any:
        cleaned = self._strip_json_fence(self._strip_think_tags(raw_text or ""))
        try:
            return json.loads(cleaned or "{}")
        except json.JSONDecodeError:
            logger.warning("LLM response is not valid JSON: %.200s", cleaned)
            return {}

    @staticmethod
    def validate_chart_option(payload: Any) -> ChartOption:
        if not isinstance(payload, dict):
            raise GenerationError("Invalid chart option received from LLM: expected a JSON object")

        series = payload.get("series")
        if not isinstance(series, list) or not series:
            raise GenerationError("Invalid chart option received from LLM: 'series' must be a non-empty list")

        first = series[0]
        if not isinstance(first, dict) or not first.get("type"):
            raise GenerationError("Invalid chart option received from LLM: series[0] has no 'type'")
        if not isinstance(first.get("data"), list):
            raise GenerationError("Invalid chart option received from LLM: series[0].data must be a list")

        try:
            return ChartOption.from_payload(payload)
        except PydanticValidationError as exc:
            raise GenerationError(f"Invalid chart option received from LLM: {exc}") from exc

    def generate(self, data_source: Any, prompt: str) -> ChartOption:
        system_prompt, user_prompt = self.build_prompts(data_source, prompt)
        config = GenerateConfig(temperature=self.temperature, response_format="json_object")

        logger.info("Requesting chart option (%d chars of user prompt)", len(user_prompt))
        raw_text = self.llm.complete(system_prompt, user_prompt, config)

        try:
            return self.validate_chart_option(self._decode(raw_text))
        except GenerationError:
            logger.error("Rejected LLM chart output: %.200s", raw_text)
            raise
