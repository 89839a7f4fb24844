"""Filter suggestions (customers, brands, seasons) for the analysis form."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from sales_insights.clients import SupabaseClient, SupabaseError
from sales_insights.schemas import ContextResponse

CONTEXT_COLUMNS = ("customer", "brand", "season")

SAMPLE_RECORDS: tuple[dict[str, Any], ...] = (
    {
        "customer": "Northwind Outfitters",
        "brand": "ActiveLife",
        "season": "Spring",
        "stage": "Proposal",
        "amount": 185000,
        "notes": "Bundle with accessories",
    },
    {
        "customer": "Summit Stores",
        "brand": "ActiveLife",
        "season": "Summer",
        "stage": "Negotiation",
        "amount": 220000,
        "notes": "Close date likely this month",
    },
    {
        "customer": "Harbor Co-op",
        "brand": "UrbanFlex",
        "season": "Holiday",
        "stage": "Committed",
        "amount": 310000,
    },
    {
        "customer": "Northwind Outfitters",
        "brand": "UrbanFlex",
        "season": "Holiday",
        "stage": "Discovery",
        "amount": 95000,
    },
    {
        "customer": "Metro Sports",
        "brand": "TrailWorks",
        "season": "Spring",
        "stage": "Proposal",
        "amount": 140000,
    },
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ContextSet:
    customers: List[str] = field(default_factory=list)
    brands: List[str] = field(default_factory=list)
    seasons: List[str] = field(default_factory=list)


def _unique(values: Iterable[Any]) -> List[str]:
    # dict preserves insertion order, so the first occurrence wins.
    return list(dict.fromkeys(str(value) for value in values if value))


def format_contexts(rows: Iterable[Mapping[str, Any]]) -> ContextSet:
    """Deduplicate the non-empty customer, brand and season values."""
    rows = [row for row in rows if isinstance(row, Mapping)]
    return ContextSet(
        customers=_unique(row.get("customer") for row in rows),
        brands=_unique(row.get("brand") for row in rows),
        seasons=_unique(row.get("season") for row in rows),
    )


class ContextService:
    """Serve context suggestions from Supabase, or from sample data."""

    def __init__(
        self,
        client: SupabaseClient | None,
        *,
        table: str = "sales_records",
        row_limit: int = 500,
    ) -> None:
        self._client = client
        self._table = table
        self._row_limit = row_limit

    async def _fetch_from_supabase(self) -> Optional[ContextSet]:
        if self._client is None:
            return None
        try:
            rows = await self._client.select(
                self._table, columns=CONTEXT_COLUMNS, limit=self._row_limit
            )
        except SupabaseError as exc:
            logger.warning("Unable to fetch contexts from Supabase: %s", exc)
            return None
        return format_contexts(rows)

    async def load(self) -> ContextResponse:
        contexts = await self._fetch_from_supabase()
        source = "supabase"
        if contexts is None:
            contexts = format_contexts(SAMPLE_RECORDS)
            source = "sample"
        return ContextResponse(
            source=source,
            customers=contexts.customers,
            brands=contexts.brands,
            seasons=contexts.seasons,
        )


__all__ = [
    "CONTEXT_COLUMNS",
    "ContextService",
    "ContextSet",
    "SAMPLE_RECORDS",
    "format_contexts",
]
