import base64
import json
import logging

from chart_mcp.chart import create_chart_generator
from chart_mcp.chart.api_schemas import ChartRequest, ChartResponse
from chart_mcp.chart.generator import ChartGenerator
from chart_mcp.chart.schemas import ChartOption
from chart_mcp.core.config import Settings, settings as default_settings
from chart_mcp.core.errors import ChartMCPError
from chart_mcp.data import create_data_loader
from chart_mcp.data.resolver import parse_data_uri, resolve_data_path
from chart_mcp.data.schemas import LoadedData

logger = logging.getLogger(__name__)


def load_data_resource(identifier: str, settings: Settings | None = None) -> LoadedData:
    settings = settings or default_settings
    file_path = resolve_data_path(identifier, settings.upload_dir)
    return create_data_loader(settings).load(file_path)


def generate_chart_option(
    data_resource: str,
    prompt: str,
    settings: Settings | None = None,
    generator: ChartGenerator | None = None,
) -> ChartOption:
    settings = settings or default_settings
    filename = parse_data_uri(data_resource)
    data = load_data_resource(filename, settings)
    generator = generator or create_chart_generator(settings=settings)
    return generator.generate(data, prompt)


def build_chart_url(option: ChartOption | dict, base_url: str) -> str:
    payload = option.to_dict() if isinstance(option, ChartOption) else option
    raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    return f"{base_url}?options={encoded}"


def generate_chart(
    request: ChartRequest,
    settings: Settings | None = None,
    generator: ChartGenerator | None = None,
) -> ChartResponse:
    settings = settings or default_settings
    try:
        option = generate_chart_option(request.data_resource, request.prompt, settings, generator)
    # ValueError covers a missing or unsupported LLM configuration
    except (ChartMCPError, ValueError) as exc:
        logger.error("Chart generation error: %s", exc)
        return ChartResponse(status="error", error=str(exc))

    chart = option.to_dict()
    return ChartResponse(
        status="success",
        chart=chart,
        url=build_chart_url(chart, settings.CHART_RENDER_URL),
    )
