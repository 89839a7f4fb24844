"""Analysis strategies: remote Gemini inference or the local heuristic summary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from sales_insights.clients import GeminiClient
from sales_insights.core.config import AppSettings

from .normalization import SalesRecord
from .prompts import SYSTEM_INSTRUCTION, build_prompt, compose_user_content
from .summary import summarize_locally

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProviderReply:
    """Text produced by a provider; ``fallback`` marks the local summary."""

    text: str
    fallback: bool = False


class AnalysisProvider(Protocol):
    async def analyze(
        self,
        *,
        raw_sales_text: str,
        records: list[SalesRecord],
        analysis_type: str | None,
        filters: Mapping[str, Any],
    ) -> ProviderReply:
        ...


class LocalSummaryProvider:
    """Summarize normalized records without calling out to a model."""

    async def analyze(
        self,
        *,
        raw_sales_text: str,
        records: list[SalesRecord],
        analysis_type: str | None,
        filters: Mapping[str, Any],
    ) -> ProviderReply:
        return ProviderReply(text=summarize_locally(records, filters), fallback=True)


class GeminiAnalysisProvider:
    """Ask Gemini for the three-section sales narrative."""

    def __init__(self, gemini_client: GeminiClient) -> None:
        self._gemini = gemini_client

    async def analyze(
        self,
        *,
        raw_sales_text: str,
        records: list[SalesRecord],
        analysis_type: str | None,
        filters: Mapping[str, Any],
    ) -> ProviderReply:
        prompt = build_prompt(analysis_type=analysis_type, filters=filters)
        text = await self._gemini.generate_analysis(
            system_instruction=SYSTEM_INSTRUCTION,
            content=compose_user_content(prompt, raw_sales_text),
        )
        return ProviderReply(text=(text or "").strip())


def build_analysis_provider(settings: AppSettings) -> AnalysisProvider:
    """Pick the remote provider when Gemini credentials are configured."""
    if settings.gemini.api_key:
        logger.info("Using Gemini model '%s' for sales analysis.", settings.gemini.model_name)
        return GeminiAnalysisProvider(GeminiClient(settings.gemini))
    logger.warning("GEMINI_API_KEY is not set; serving local summaries only.")
    return LocalSummaryProvider()


__all__ = [
    "AnalysisProvider",
    "GeminiAnalysisProvider",
    "LocalSummaryProvider",
    "ProviderReply",
    "build_analysis_provider",
]
