"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from sales_insights.clients import SupabaseClient
from sales_insights.core.config import get_settings
from sales_insights.services import (
    AnalysisAuditLogger,
    AnalysisProvider,
    ContextService,
    SalesAnalysisService,
    build_analysis_provider,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_supabase_read_client() -> SupabaseClient | None:
    """Provide a Supabase client for context lookups when configured."""
    supabase = _settings().supabase
    if not supabase.url or not supabase.read_key:
        return None
    return SupabaseClient(url=supabase.url, api_key=supabase.read_key)


@lru_cache()
def get_supabase_service_client() -> SupabaseClient | None:
    """Provide a privileged Supabase client for audit writes when configured."""
    supabase = _settings().supabase
    if not supabase.url or not supabase.service_role_key:
        return None
    return SupabaseClient(url=supabase.url, api_key=supabase.service_role_key)


@lru_cache()
def get_analysis_provider() -> AnalysisProvider:
    """Select the analysis strategy once per process."""
    return build_analysis_provider(_settings())


@lru_cache()
def get_audit_logger() -> AnalysisAuditLogger:
    """Provide the analysis audit logger."""
    return AnalysisAuditLogger(
        get_supabase_service_client(),
        table=_settings().supabase.analysis_log_table,
    )


def get_context_service() -> ContextService:
    """Build a context service backed by the read-only Supabase client."""
    supabase = _settings().supabase
    return ContextService(
        get_supabase_read_client(),
        table=supabase.sales_records_table,
        row_limit=supabase.context_row_limit,
    )


def get_sales_analysis_service() -> SalesAnalysisService:
    """Build the sales analysis service with the selected provider."""
    return SalesAnalysisService(
        provider=get_analysis_provider(),
        audit_logger=get_audit_logger(),
    )


__all__ = [
    "get_analysis_provider",
    "get_audit_logger",
    "get_context_service",
    "get_sales_analysis_service",
    "get_supabase_read_client",
    "get_supabase_service_client",
]
