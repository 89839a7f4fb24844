"""Prompt construction for model-backed sales analysis."""

from __future__ import annotations

from textwrap import dedent
from typing import Any, Mapping, Optional

from .summary import render_filters

SYSTEM_INSTRUCTION = (
    "You are an expert AI sales analyst who is factual, concise, and action oriented."
)

ANALYSIS_FOCUS: dict[str, str] = {
    "trends": (
        "Identify demand trends, seasonality, and drivers across customers and brands."
    ),
    "pipeline": (
        "Predict pipeline milestones, risks, and likely close timelines with "
        "confidence levels."
    ),
    "communications": (
        "Draft succinct client-ready communication bullets and recommendations "
        "based on the data."
    ),
}
DEFAULT_FOCUS = "General sales insights."

_PROMPT_TEMPLATE = dedent(
    """\
    You are a senior sales operations analyst. Use the sales data below to summarize insights.

    Context filters: {filters}
    Required focuses: {focus}

    Deliver three sections:
    1) Trend Highlights (bullets)
    2) Pipeline Outlook (probable milestones, risks, next best actions)
    3) Draft Communications (short, actionable notes for stakeholders)

    Use concise bullets and include numeric references when available. If data is sparse, state assumptions."""
)


def focus_for(analysis_type: Optional[str]) -> str:
    return ANALYSIS_FOCUS.get(analysis_type or "", DEFAULT_FOCUS)


def build_prompt(
    *,
    analysis_type: Optional[str],
    filters: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render the instruction block for the requested analysis type."""
    return _PROMPT_TEMPLATE.format(
        filters=render_filters(filters, "; ") or "none provided",
        focus=focus_for(analysis_type),
    )


def compose_user_content(prompt: str, raw_sales_text: str) -> str:
    """Attach the raw sales data to the instruction block."""
    return f"{prompt}\n\nSales data:\n{raw_sales_text}"


__all__ = [
    "ANALYSIS_FOCUS",
    "DEFAULT_FOCUS",
    "SYSTEM_INSTRUCTION",
    "build_prompt",
    "compose_user_content",
    "focus_for",
]
