import pytest

from chart_mcp.core.config import Settings
from chart_mcp.core.llm.base import BaseLLM
from chart_mcp.core.llm.schemas import GenerateConfig, LLMResponse


class FakeLLM(BaseLLM):
    def __init__(self, text: str = ""):
        self.text = text
        self.calls: list[dict] = []

    def generate(self, messages: list[dict], config: GenerateConfig | None = None) -> LLMResponse:
        self.calls.append({"messages": messages, "config": config})
        return LLMResponse(text=self.text, usage={})


@pytest.fixture()
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture()
def settings(upload_dir):
    return Settings(
        UPLOAD_DIR=str(upload_dir),
        MAX_FILE_SIZE=1,
        LLM_PROVIDER="openai",
        AI_MODEL="deepseek-chat",
        API_KEY="test-key",
        BASE_URL="https://llm.example.com/v1",
        CHART_RENDER_URL="https://charts.example.com/page",
    )


@pytest.fixture()
def fake_llm():
    def _make(text: str) -> FakeLLM:
        return FakeLLM(text)

    return _make
