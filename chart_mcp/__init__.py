"""Chart MCP Server: turn tabular data files into ECharts options with an LLM."""

__version__ = "1.0.0"
