"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_analysis_provider,
    get_audit_logger,
    get_context_service,
    get_sales_analysis_service,
    get_supabase_read_client,
    get_supabase_service_client,
)

__all__ = [
    "get_analysis_provider",
    "get_audit_logger",
    "get_context_service",
    "get_sales_analysis_service",
    "get_supabase_read_client",
    "get_supabase_service_client",
]
