"""MCP server exposing data files as resources and chart generation as a tool.

Resources:
- data://{filename}: the parsed file from the upload directory, as JSON text.

Tools:
- generate_chart: builds an ECharts option for a data resource from a
  natural-language requirement and returns a render page URL carrying the
  option as a base64 ``options`` query parameter.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from pydantic import Field

from chart_mcp.chart.service import build_chart_url, generate_chart_option, load_data_resource
from chart_mcp.core.config import Settings, settings
from chart_mcp.core.logging import setup_logging

logger = logging.getLogger(__name__)

mcp = FastMCP("Chart MCP Server")


def ensure_upload_dir(config: Settings) -> Path:
    upload_dir = config.upload_dir
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def read_data_file(filename: str) -> str:
    """Load a data file from the upload directory and return it as JSON."""
    try:
        data = load_data_resource(filename, settings)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to load file %s: %s", filename, exc)
        raise ResourceError(f"Failed to load file: {exc}") from exc
    return json.dumps(data.to_payload(), ensure_ascii=False, default=str)


def generate_chart(
    dataResource: Annotated[  # noqa: N803
        str,
        Field(description="URI of the data resource, formatted as data://{filename}"),
    ],
    prompt: Annotated[
        str,
        Field(
            min_length=1,
            max_length=1000,
            description="What the chart should show, e.g. 'sales trend by month'",
        ),
    ],
) -> str:
    """Generate an ECharts chart for a data file and return a link that renders it."""
    try:
        option = generate_chart_option(dataResource, prompt, settings)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Chart generation error")
        raise ToolError(f"Error generating chart: {exc}") from exc
    return build_chart_url(option, settings.CHART_RENDER_URL)


mcp.resource(
    "data://{filename}",
    name="data-file",
    description="Parsed contents of a CSV, JSON or Excel file in the upload directory",
    mime_type="application/json",
)(read_data_file)
mcp.tool(name="generate_chart")(generate_chart)


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    try:
        settings.validate_required()
        upload_dir = ensure_upload_dir(settings)
    except (ValueError, OSError) as exc:
        logger.error("Failed to start server: %s", exc)
        sys.exit(1)

    logger.info("Chart MCP Server started successfully (upload dir: %s)", upload_dir)
    try:
        mcp.run()
    except Exception:  # noqa: BLE001
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()
