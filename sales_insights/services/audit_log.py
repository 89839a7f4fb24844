"""Best-effort audit trail of analysis attempts stored in Supabase."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sales_insights.clients import SupabaseClient, SupabaseError

RESULT_PREVIEW_LIMIT = 500

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuditLogEntry:
    """Outcome of one analysis attempt."""

    analysis_type: Optional[str]
    filters: Dict[str, Any] = field(default_factory=dict)
    result_preview: str = ""
    succeeded: bool = True
    error_message: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        return {
            "analysis_type": self.analysis_type,
            "filters": self.filters,
            "result_preview": (self.result_preview or "")[:RESULT_PREVIEW_LIMIT],
            "succeeded": self.succeeded,
            "error_message": self.error_message or None,
        }


class AnalysisAuditLogger:
    """Append audit entries; write failures never reach the caller."""

    def __init__(
        self,
        client: SupabaseClient | None,
        *,
        table: str = "analysis_logs",
    ) -> None:
        self._client = client
        self._table = table

    async def record(self, entry: AuditLogEntry) -> None:
        if self._client is None:
            return
        try:
            await self._client.insert(self._table, entry.to_row())
        except SupabaseError as exc:
            logger.warning("Unable to log analysis to Supabase: %s", exc)


__all__ = ["AnalysisAuditLogger", "AuditLogEntry", "RESULT_PREVIEW_LIMIT"]
