from chart_mcp.core.llm.service import clear_llm_cache, create_llm

__all__ = ["create_llm", "clear_llm_cache"]
