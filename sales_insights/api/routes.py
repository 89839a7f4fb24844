"""
FastAPI routes for the sales insights service.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from fastapi.responses import JSONResponse

from sales_insights.dependencies import get_context_service, get_sales_analysis_service
from sales_insights.schemas import (
    AnalysisError,
    AnalysisResult,
    AnalyzeRequest,
    ContextResponse,
)
from sales_insights.services import (
    AnalysisStatus,
    ContextService,
    MissingSalesDataError,
    SalesAnalysisService,
)

router = APIRouter()

PROVIDER_NOT_CONFIGURED = (
    "AI provider is not configured. Add GEMINI_API_KEY to enable insights."
)
ANALYSIS_FAILED = "Failed to analyze data. Please try again later."


def _error(status: HTTPStatus, message: str, data: str | None = None) -> JSONResponse:
    body = AnalysisError(error=message, data=data).model_dump(exclude_none=True)
    return JSONResponse(status_code=status, content=body)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/contexts", response_model=ContextResponse, status_code=HTTPStatus.OK)
async def list_contexts(
    service: Annotated[ContextService, Depends(get_context_service)],
) -> ContextResponse:
    """Return customer, brand and season suggestions for the filter inputs."""
    return await service.load()


@router.post(
    "/analyze",
    status_code=HTTPStatus.OK,
    response_model=AnalysisResult,
    responses={
        400: {"model": AnalysisError},
        500: {"model": AnalysisError},
        503: {"model": AnalysisError},
    },
)
async def analyze_sales_data(
    background_tasks: BackgroundTasks,
    service: Annotated[SalesAnalysisService, Depends(get_sales_analysis_service)],
    payload: Annotated[AnalyzeRequest | None, Body()] = None,
) -> JSONResponse:
    """Analyze free-form sales data with Gemini, or summarize it locally."""
    try:
        outcome = await service.analyze(payload, background_tasks=background_tasks)
    except MissingSalesDataError as exc:
        return _error(HTTPStatus.BAD_REQUEST, str(exc))

    if outcome.status is AnalysisStatus.FALLBACK:
        return _error(HTTPStatus.SERVICE_UNAVAILABLE, PROVIDER_NOT_CONFIGURED, outcome.text)
    if outcome.status is AnalysisStatus.FAILED:
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, ANALYSIS_FAILED)

    return JSONResponse(content=AnalysisResult(result=outcome.text).model_dump())
