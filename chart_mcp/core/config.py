from pathlib import Path

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_FILE)

REQUIRED_SETTINGS = ("UPLOAD_DIR", "API_KEY", "BASE_URL", "AI_MODEL")


class Settings(BaseSettings):
    # Data files
    UPLOAD_DIR: str = ""
    MAX_FILE_SIZE: int = 10  # megabytes

    # LLM backend (OpenAI-compatible by default, e.g. DeepSeek)
    LLM_PROVIDER: str = "openai"
    AI_MODEL: str = ""
    API_KEY: str = ""
    BASE_URL: str = ""

    # Page that renders a base64-encoded option passed as ?options=
    CHART_RENDER_URL: str = "https://chart.micoai.cn/v1/page"

    LOG_LEVEL: str = "INFO"

    @property
    def upload_dir(self) -> Path:
        configured = (self.UPLOAD_DIR or "").strip()
        base = Path(configured) if configured else Path.cwd() / "uploads"
        return base.resolve()

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.MAX_FILE_SIZE) * 1024 * 1024

    def validate_required(self) -> None:
        missing = [name for name in REQUIRED_SETTINGS if not str(getattr(self, name, "")).strip()]
        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

    class Config:
        env_file = str(ENV_FILE)
        extra = "ignore"


settings = Settings()
