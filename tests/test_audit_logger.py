try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from sales_insights.clients import SupabaseClient
from sales_insights.services.audit_log import AnalysisAuditLogger, AuditLogEntry


def _supabase(handler) -> SupabaseClient:
    return SupabaseClient(
        url="https://project.supabase.co/",
        api_key="service-key",
        transport=httpx.MockTransport(handler),
    )


def test_row_truncates_preview() -> None:
    entry = AuditLogEntry(
        analysis_type="trends",
        filters={"brand": "Zest"},
        result_preview="x" * 800,
    )

    row = entry.to_row()

    assert len(row["result_preview"]) == 500
    assert row == {
        "analysis_type": "trends",
        "filters": {"brand": "Zest"},
        "result_preview": "x" * 500,
        "succeeded": True,
        "error_message": None,
    }


@pytest.mark.asyncio
async def test_record_inserts_row() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201)

    logger = AnalysisAuditLogger(_supabase(handler), table="analysis_logs")
    await logger.record(
        AuditLogEntry(
            analysis_type="pipeline",
            succeeded=False,
            error_message="quota exceeded",
        )
    )

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/rest/v1/analysis_logs"
    assert request.headers["prefer"] == "return=minimal"
    assert request.headers["authorization"] == "Bearer service-key"
    assert json.loads(request.content) == {
        "analysis_type": "pipeline",
        "filters": {},
        "result_preview": "",
        "succeeded": False,
        "error_message": "quota exceeded",
    }


@pytest.mark.asyncio
async def test_record_swallows_write_failures(caplog) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, json={"message": "unavailable"})

    logger = AnalysisAuditLogger(_supabase(handler))

    with caplog.at_level("WARNING"):
        await logger.record(AuditLogEntry(analysis_type="trends"))

    # Inserts are never retried.
    assert len(calls) == 1
    assert "Unable to log analysis to Supabase" in caplog.text


@pytest.mark.asyncio
async def test_record_without_client_is_a_no_op() -> None:
    logger = AnalysisAuditLogger(None)

    await logger.record(AuditLogEntry(analysis_type="trends"))
