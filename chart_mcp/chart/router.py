from fastapi import APIRouter, HTTPException

from chart_mcp.chart.api_schemas import ChartRequest, ChartResponse, DataResponse
from chart_mcp.chart.service import generate_chart, load_data_resource
from chart_mcp.core.errors import DataIOError, FormatError, ValidationError

router = APIRouter(tags=["Chart"], prefix="/v1/chart")


@router.get("/data/{filename}", response_model=DataResponse)
async def get_data_endpoint(filename: str):
    try:
        data = load_data_resource(filename)
    except DataIOError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ValidationError, FormatError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return data.to_payload()


@router.post("/generate", response_model=ChartResponse)
async def generate_chart_endpoint(request: ChartRequest):
    return generate_chart(request=request)
