"""
FastAPI application entrypoint for the sales insights service.
"""

from __future__ import annotations

from fastapi import FastAPI

from sales_insights.api.routes import router as api_router
from sales_insights.core.config import get_settings
from sales_insights.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Sales Insights Service",
        version="0.1.0",
        description=(
            "Normalizes free-form sales data and returns Gemini-backed or local "
            "sales analyses."
        ),
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
