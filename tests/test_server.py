import base64
import json
from unittest.mock import patch

import pytest
from fastmcp.exceptions import ResourceError, ToolError

from chart_mcp import server
from chart_mcp.chart.schemas import ChartOption
from chart_mcp.core.config import settings as app_settings
from chart_mcp.core.errors import GenerationError


@pytest.fixture(autouse=True)
def configured(upload_dir, monkeypatch):
    monkeypatch.setattr(app_settings, "UPLOAD_DIR", str(upload_dir))
    monkeypatch.setattr(app_settings, "CHART_RENDER_URL", "https://charts.example.com/page")


def test_read_data_file_returns_json_payload(upload_dir):
    (upload_dir / "sales.csv").write_text("month,sales\nJan,10\n", encoding="utf-8")

    payload = json.loads(server.read_data_file("sales.csv"))

    assert payload == {
        "headers": ["month", "sales"],
        "rows": [{"month": "Jan", "sales": 10}],
        "sourceFile": "sales.csv",
    }


def test_read_data_file_wraps_errors():
    with pytest.raises(ResourceError, match="Failed to load file: File not found"):
        server.read_data_file("missing.csv")


def test_read_data_file_rejects_traversal():
    with pytest.raises(ResourceError, match="Invalid filename"):
        server.read_data_file("..secret.csv")


def test_generate_chart_returns_render_url():
    option = ChartOption.from_payload({"series": [{"type": "pie", "data": [{"name": "a", "value": 1}]}]})

    with patch("chart_mcp.server.generate_chart_option", return_value=option) as mock_generate:
        url = server.generate_chart("data://sales.csv", "share by category")

    assert url.startswith("https://charts.example.com/page?options=")
    encoded = url.split("?options=", 1)[1]
    assert json.loads(base64.b64decode(encoded)) == option.to_dict()
    assert mock_generate.call_args.args[:2] == ("data://sales.csv", "share by category")


def test_generate_chart_rejects_non_data_uri():
    with pytest.raises(ToolError, match="must start with 'data://'"):
        server.generate_chart("file://sales.csv", "anything")


def test_generate_chart_reports_generation_errors():
    with patch(
        "chart_mcp.server.generate_chart_option",
        side_effect=GenerationError("Invalid chart option received from LLM: no series"),
    ):
        with pytest.raises(ToolError, match="Error generating chart: Invalid chart option"):
            server.generate_chart("data://sales.csv", "anything")


def test_main_exits_when_settings_missing(monkeypatch):
    monkeypatch.setattr(app_settings, "API_KEY", "")

    with patch("chart_mcp.server.setup_logging"), patch.object(server.mcp, "run") as run:
        with pytest.raises(SystemExit) as exc_info:
            server.main()

    assert exc_info.value.code == 1
    run.assert_not_called()


def test_main_creates_upload_dir_and_runs(tmp_path, monkeypatch):
    target = tmp_path / "new-uploads"
    monkeypatch.setattr(app_settings, "UPLOAD_DIR", str(target))
    monkeypatch.setattr(app_settings, "API_KEY", "key")
    monkeypatch.setattr(app_settings, "BASE_URL", "https://llm.example.com/v1")
    monkeypatch.setattr(app_settings, "AI_MODEL", "deepseek-chat")

    with patch("chart_mcp.server.setup_logging"), patch.object(server.mcp, "run") as run:
        server.main()

    assert target.is_dir()
    run.assert_called_once()
