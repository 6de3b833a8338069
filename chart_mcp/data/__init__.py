from chart_mcp.core.config import Settings
from chart_mcp.data.loader import DataLoader, FileType
from chart_mcp.data.schemas import KeyedRows, LoadedData, PositionalRows


def create_data_loader(settings: Settings | None = None) -> DataLoader:
    return DataLoader(settings=settings)


__all__ = [
    "DataLoader",
    "FileType",
    "KeyedRows",
    "LoadedData",
    "PositionalRows",
    "create_data_loader",
]
