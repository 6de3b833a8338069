from typing import Any

from pydantic import BaseModel, Field


class ChartRequest(BaseModel):
    data_resource: str = Field(description="Data resource URI, formatted as data://{filename}")
    prompt: str = Field(min_length=1, max_length=1000)


class ChartResponse(BaseModel):
    status: str
    chart: dict[str, Any] | None = None
    url: str | None = None
    error: str | None = None


class DataResponse(BaseModel):
    headers: list[str]
    rows: list[Any]
    sourceFile: str
