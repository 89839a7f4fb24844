"""Service layer exports."""

from .audit_log import AnalysisAuditLogger, AuditLogEntry
from .contexts import SAMPLE_RECORDS, ContextService, ContextSet, format_contexts
from .normalization import NormalizedSalesData, SalesRecord, normalize_records
from .prompts import SYSTEM_INSTRUCTION, build_prompt, compose_user_content
from .providers import (
    AnalysisProvider,
    GeminiAnalysisProvider,
    LocalSummaryProvider,
    ProviderReply,
    build_analysis_provider,
)
from .sales_analysis import (
    AnalysisOutcome,
    AnalysisStatus,
    MissingSalesDataError,
    SalesAnalysisService,
)
from .summary import summarize_locally

__all__ = [
    "AnalysisAuditLogger",
    "AnalysisOutcome",
    "AnalysisProvider",
    "AnalysisStatus",
    "AuditLogEntry",
    "ContextService",
    "ContextSet",
    "GeminiAnalysisProvider",
    "LocalSummaryProvider",
    "MissingSalesDataError",
    "NormalizedSalesData",
    "ProviderReply",
    "SAMPLE_RECORDS",
    "SYSTEM_INSTRUCTION",
    "SalesAnalysisService",
    "SalesRecord",
    "build_analysis_provider",
    "build_prompt",
    "compose_user_content",
    "format_contexts",
    "normalize_records",
    "summarize_locally",
]
