"""Service that runs a sales analysis and records its outcome."""

from __future__ import annotations

import enum
import json
import logging
import math
from dataclasses import dataclass
from typing import Any

from fastapi import BackgroundTasks

from sales_insights.schemas import AnalyzeRequest

from .audit_log import AnalysisAuditLogger, AuditLogEntry
from .normalization import normalize_records
from .providers import AnalysisProvider

logger = logging.getLogger(__name__)


class MissingSalesDataError(ValueError):
    """Raised when a request does not carry any sales data."""


class AnalysisStatus(str, enum.Enum):
    COMPLETED = "completed"
    FALLBACK = "fallback"
    FAILED = "failed"


@dataclass(slots=True)
class AnalysisOutcome:
    status: AnalysisStatus
    text: str = ""


def _is_missing(value: Any) -> bool:
    """Empty scalars count as missing; empty lists and objects do not."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    return False


class SalesAnalysisService:
    """Normalize sales data, delegate to the provider and audit the attempt."""

    def __init__(
        self,
        provider: AnalysisProvider,
        audit_logger: AnalysisAuditLogger,
    ) -> None:
        self._provider = provider
        self._audit = audit_logger

    async def analyze(
        self,
        request: AnalyzeRequest | None,
        *,
        background_tasks: BackgroundTasks | None = None,
    ) -> AnalysisOutcome:
        if request is None or _is_missing(request.sales_data):
            raise MissingSalesDataError("Missing salesData payload.")

        normalized = normalize_records(request.sales_data)
        raw_sales_text = normalized.raw or json.dumps(
            request.sales_data, indent=2, ensure_ascii=False, default=str
        )
        entry = AuditLogEntry(
            analysis_type=request.analysis_type,
            filters=request.filters,
        )

        try:
            reply = await self._provider.analyze(
                raw_sales_text=raw_sales_text,
                records=normalized.records,
                analysis_type=request.analysis_type,
                filters=request.filters,
            )
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Sales analysis failed")
            entry.succeeded = False
            entry.error_message = str(exc) or "Failed to analyze data"
            await self._audit.record(entry)
            return AnalysisOutcome(status=AnalysisStatus.FAILED)

        entry.result_preview = reply.text
        if reply.fallback:
            await self._audit.record(entry)
            return AnalysisOutcome(status=AnalysisStatus.FALLBACK, text=reply.text)

        if background_tasks is not None:
            # Written after the response has been sent.
            background_tasks.add_task(self._audit.record, entry)
        else:
            await self._audit.record(entry)
        return AnalysisOutcome(status=AnalysisStatus.COMPLETED, text=reply.text)


__all__ = [
    "AnalysisOutcome",
    "AnalysisStatus",
    "MissingSalesDataError",
    "SalesAnalysisService",
]
