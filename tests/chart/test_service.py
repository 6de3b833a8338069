import base64
import json

import pytest

from chart_mcp.chart.api_schemas import ChartRequest
from chart_mcp.chart.generator import ChartGenerator
from chart_mcp.chart.schemas import ChartOption
from chart_mcp.chart.service import (
    build_chart_url,
    generate_chart,
    generate_chart_option,
    load_data_resource,
)
from chart_mcp.core.errors import DataIOError, ValidationError

OPTION = {"title": {"text": "Umsatz"}, "series": [{"type": "line", "data": [1, 2]}]}


def _decode_url(url: str) -> dict:
    encoded = url.split("?options=", 1)[1]
    return json.loads(base64.b64decode(encoded).decode("utf-8"))


def test_load_data_resource_reads_from_upload_dir(settings, upload_dir):
    (upload_dir / "sales.csv").write_text("month,sales\nJan,1\nFeb,2\n", encoding="utf-8")

    data = load_data_resource("data://sales.csv", settings)

    assert data.source_file == "sales.csv"
    assert len(data.rows) == 2


def test_load_data_resource_rejects_traversal(settings):
    with pytest.raises(ValidationError):
        load_data_resource("../outside.csv", settings)


def test_generate_chart_option_feeds_loaded_data_to_generator(settings, upload_dir, fake_llm):
    (upload_dir / "sales.json").write_text('[{"month": "Jan", "sales": 1}]', encoding="utf-8")
    llm = fake_llm(json.dumps(OPTION))

    option = generate_chart_option("data://sales.json", "trend", settings, ChartGenerator(llm=llm))

    assert option.to_dict() == OPTION
    assert '"sourceFile": "sales.json"' in llm.calls[0]["messages"][1]["content"]


def test_generate_chart_option_requires_data_uri(settings, fake_llm):
    with pytest.raises(ValidationError):
        generate_chart_option("sales.json", "trend", settings, ChartGenerator(llm=fake_llm("{}")))


def test_build_chart_url_encodes_compact_utf8_json():
    url = build_chart_url(ChartOption.from_payload(OPTION), "https://charts.example.com/page")

    assert url.startswith("https://charts.example.com/page?options=")
    encoded = url.split("?options=", 1)[1]
    assert base64.b64decode(encoded).decode("utf-8") == json.dumps(
        OPTION, ensure_ascii=False, separators=(",", ":")
    )


def test_generate_chart_success_response(settings, upload_dir, fake_llm):
    (upload_dir / "sales.csv").write_text("month,sales\nJan,1\n", encoding="utf-8")
    generator = ChartGenerator(llm=fake_llm(json.dumps(OPTION)))

    response = generate_chart(
        ChartRequest(data_resource="data://sales.csv", prompt="trend"),
        settings=settings,
        generator=generator,
    )

    assert response.status == "success"
    assert response.chart == OPTION
    assert _decode_url(response.url) == OPTION
    assert response.error is None


def test_generate_chart_error_response_for_missing_file(settings, fake_llm):
    response = generate_chart(
        ChartRequest(data_resource="data://missing.csv", prompt="trend"),
        settings=settings,
        generator=ChartGenerator(llm=fake_llm(json.dumps(OPTION))),
    )

    assert response.status == "error"
    assert response.chart is None
    assert "File not found" in response.error


def test_missing_file_error_is_io_error(settings):
    with pytest.raises(DataIOError):
        load_data_resource("data://missing.csv", settings)
