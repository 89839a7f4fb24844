try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import httpx
import pytest

from sales_insights.main import app
from sales_insights.services import (
    ContextService,
    LocalSummaryProvider,
    ProviderReply,
    SalesAnalysisService,
    normalize_records,
    summarize_locally,
)


class RecordingAuditLogger:
    def __init__(self) -> None:
        self.entries = []

    async def record(self, entry) -> None:
        self.entries.append(entry)


class StubProvider:
    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error

    async def analyze(self, **_: object) -> ProviderReply:
        if self.error is not None:
            raise self.error
        return ProviderReply(text=self.text)


pytestmark = pytest.mark.anyio("asyncio")

SALES = [
    {"customer": "X", "brand": "Zest", "season": "Spring", "amount": 100},
    {"customer": "Y", "brand": "Zest", "season": "Summer", "amount": 300},
]


@pytest.fixture()
def audit():
    recorder = RecordingAuditLogger()
    app.dependency_overrides.clear()
    yield recorder
    app.dependency_overrides.clear()


def _use_provider(provider, audit) -> None:
    from sales_insights import dependencies

    app.dependency_overrides[dependencies.get_sales_analysis_service] = (
        lambda: SalesAnalysisService(provider=provider, audit_logger=audit)
    )


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    )


async def test_health() -> None:
    async with _client() as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_contexts_without_supabase_serve_sample_data() -> None:
    from sales_insights import dependencies

    app.dependency_overrides[dependencies.get_context_service] = lambda: ContextService(None)
    try:
        async with _client() as client:
            first = await client.get("/api/contexts")
            second = await client.get("/api/contexts")
    finally:
        app.dependency_overrides.clear()

    assert first.status_code == 200
    assert first.json() == second.json()
    assert first.json() == {
        "source": "sample",
        "customers": [
            "Northwind Outfitters",
            "Summit Stores",
            "Harbor Co-op",
            "Metro Sports",
        ],
        "brands": ["ActiveLife", "UrbanFlex", "TrailWorks"],
        "seasons": ["Spring", "Summer", "Holiday"],
    }


async def test_analyze_without_sales_data_is_rejected(audit) -> None:
    _use_provider(StubProvider(text="unused"), audit)

    async with _client() as client:
        missing = await client.post("/api/analyze", json={"analysisType": "trends"})
        empty_body = await client.post("/api/analyze")

    assert missing.status_code == 400
    assert missing.json() == {"error": "Missing salesData payload."}
    assert empty_body.status_code == 400
    assert audit.entries == []


async def test_analyze_without_provider_returns_local_summary(audit) -> None:
    _use_provider(LocalSummaryProvider(), audit)
    filters = {"brand": "Zest", "season": ""}

    async with _client() as client:
        response = await client.post(
            "/api/analyze",
            json={"salesData": SALES, "filters": filters},
        )

    assert response.status_code == 503
    body = response.json()
    assert body["error"] == (
        "AI provider is not configured. Add GEMINI_API_KEY to enable insights."
    )
    expected = summarize_locally(normalize_records(SALES).records, filters)
    assert body["data"] == expected
    assert "Top customers: Y: $300; X: $100." in body["data"]
    assert len(audit.entries) == 1
    assert audit.entries[0].succeeded is True


async def test_analyze_success_returns_model_text(audit) -> None:
    _use_provider(StubProvider(text="Trend Highlights: Zest up 3x"), audit)

    async with _client() as client:
        response = await client.post(
            "/api/analyze",
            json={
                "salesData": "X bought 100 of Zest; Y bought 300",
                "analysisType": "communications",
            },
        )

    assert response.status_code == 200
    assert response.json() == {"result": "Trend Highlights: Zest up 3x"}
    assert len(audit.entries) == 1
    entry = audit.entries[0]
    assert entry.succeeded is True
    assert entry.analysis_type == "communications"
    assert entry.result_preview == "Trend Highlights: Zest up 3x"


async def test_analyze_failure_hides_error_detail(audit) -> None:
    _use_provider(StubProvider(error=RuntimeError("secret upstream detail")), audit)

    async with _client() as client:
        response = await client.post("/api/analyze", json={"salesData": SALES})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze data. Please try again later."}
    assert "secret upstream detail" not in response.text
    assert len(audit.entries) == 1
    assert audit.entries[0].succeeded is False
    assert audit.entries[0].error_message == "secret upstream detail"


async def test_default_wiring_falls_back_to_local_summary() -> None:
    from sales_insights import dependencies

    app.dependency_overrides.clear()
    dependencies.get_analysis_provider.cache_clear()
    dependencies.get_audit_logger.cache_clear()

    async with _client() as client:
        response = await client.post("/api/analyze", json={"salesData": SALES})

    assert response.status_code == 503
    assert response.json()["data"].startswith("AI provider is not configured.")
