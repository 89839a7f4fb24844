try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from sales_insights.services.prompts import (
    ANALYSIS_FOCUS,
    DEFAULT_FOCUS,
    build_prompt,
    compose_user_content,
)


@pytest.mark.parametrize("analysis_type", ["trends", "pipeline", "communications"])
def test_known_types_use_their_focus(analysis_type: str) -> None:
    prompt = build_prompt(analysis_type=analysis_type, filters={})

    assert f"Required focuses: {ANALYSIS_FOCUS[analysis_type]}" in prompt
    assert DEFAULT_FOCUS not in prompt


def test_pipeline_focus_sentence() -> None:
    prompt = build_prompt(analysis_type="pipeline")

    assert (
        "Predict pipeline milestones, risks, and likely close timelines with "
        "confidence levels." in prompt
    )


@pytest.mark.parametrize("analysis_type", ["forecast", "", None])
def test_unknown_type_falls_back_to_general_insights(analysis_type) -> None:
    prompt = build_prompt(analysis_type=analysis_type, filters={})

    assert "Required focuses: General sales insights." in prompt


def test_filters_are_rendered_or_marked_missing() -> None:
    with_filters = build_prompt(
        analysis_type="trends",
        filters={"customer": "Summit Stores", "brand": "", "season": "Summer"},
    )
    without_filters = build_prompt(analysis_type="trends", filters={})

    assert "Context filters: customer: Summit Stores; season: Summer" in with_filters
    assert "Context filters: none provided" in without_filters


def test_prompt_requests_three_sections() -> None:
    prompt = build_prompt(analysis_type="communications", filters=None)

    assert prompt.startswith("You are a senior sales operations analyst.")
    for heading in (
        "1) Trend Highlights (bullets)",
        "2) Pipeline Outlook (probable milestones, risks, next best actions)",
        "3) Draft Communications (short, actionable notes for stakeholders)",
    ):
        assert heading in prompt
    assert prompt.endswith("If data is sparse, state assumptions.")


def test_user_content_appends_sales_data() -> None:
    content = compose_user_content("PROMPT", '[{"amount": 1}]')

    assert content == 'PROMPT\n\nSales data:\n[{"amount": 1}]'
