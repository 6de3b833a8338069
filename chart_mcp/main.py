from fastapi import FastAPI

from chart_mcp import __version__
from chart_mcp.chart.router import router as chart_router
from chart_mcp.core.config import settings
from chart_mcp.core.logging import setup_logging

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title="Chart MCP Server", version=__version__)


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(chart_router)
