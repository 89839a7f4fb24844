"""Deterministic sales summary used when no language model is configured."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from .normalization import SalesRecord

NO_RECORDS_MESSAGE = "No structured sales records were provided to summarize."
LOCAL_NOTICE = "AI provider is not configured. Showing a quick local summary instead."

_TOP_N = 3


def format_amount(value: float) -> str:
    """Render money with thousands separators and up to three decimals."""
    rendered = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if rendered in ("", "-0") else rendered


def render_filters(filters: Optional[Mapping[str, Any]], separator: str) -> str:
    """Join the filters that carry a value as ``key: value`` pairs."""
    return separator.join(
        f"{key}: {value}" for key, value in (filters or {}).items() if value
    )


def _group_totals(records: Iterable[SalesRecord], attribute: str) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for record in records:
        key = getattr(record, attribute) or "Unspecified"
        totals[key] = totals.get(key, 0.0) + (record.amount or 0.0)
    return totals


def _top(totals: Mapping[str, float]) -> str:
    # sorted() is stable, so ties keep first-seen order.
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return "; ".join(
        f"{name}: ${format_amount(value)}" for name, value in ranked[:_TOP_N]
    )


def summarize_locally(
    records: list[SalesRecord],
    filters: Optional[Mapping[str, Any]] = None,
) -> str:
    """Summarize totals and the leading customers, brands and seasons."""
    if not records:
        return NO_RECORDS_MESSAGE

    total = sum(record.amount or 0.0 for record in records)
    by_customer = _group_totals(records, "customer")
    by_brand = _group_totals(records, "brand")
    by_season = _group_totals(records, "season")

    filter_summary = render_filters(filters, ", ")
    sentences = [
        LOCAL_NOTICE,
        f"Applied filters -> {filter_summary}." if filter_summary else "No filters applied.",
        f"Total pipeline value: ${format_amount(total)}.",
    ]
    if by_customer:
        sentences.append(f"Top customers: {_top(by_customer)}.")
    if by_brand:
        sentences.append(f"Top brands: {_top(by_brand)}.")
    if by_season:
        sentences.append(f"Top seasons/periods: {_top(by_season)}.")
    return " ".join(sentences)


__all__ = [
    "LOCAL_NOTICE",
    "NO_RECORDS_MESSAGE",
    "format_amount",
    "render_filters",
    "summarize_locally",
]
