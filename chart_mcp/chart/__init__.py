from chart_mcp.chart.generator import ChartGenerator
from chart_mcp.chart.schemas import ChartOption, ChartSeries
from chart_mcp.core.config import Settings
from chart_mcp.core.llm import create_llm
from chart_mcp.core.llm.base import BaseLLM


def create_chart_generator(
    llm: BaseLLM | None = None,
    settings: Settings | None = None,
) -> ChartGenerator:
    chart_llm = llm or create_llm(settings=settings)
    return ChartGenerator(llm=chart_llm)


__all__ = ["ChartGenerator", "ChartOption", "ChartSeries", "create_chart_generator"]
