"""Minimal Supabase client speaking to the PostgREST endpoint over HTTP."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import httpx

from sales_insights.utils.http import SINGLE_ATTEMPT, RetryConfig, request_with_retry


class SupabaseError(RuntimeError):
    """Raised when a Supabase request fails or returns an unexpected payload."""


class SupabaseClient:
    """Select and insert rows in Supabase tables using a single API key."""

    def __init__(
        self,
        *,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = f"{url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._timeout = timeout
        self._retry_config = retry_config or RetryConfig()
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._transport,
        )

    async def select(
        self,
        table: str,
        *,
        columns: Iterable[str],
        limit: int | None = None,
    ) -> List[Dict[str, Any]]:
        """Return rows from ``table`` projected onto ``columns``."""
        params: Dict[str, Any] = {"select": ",".join(columns)}
        if limit is not None:
            params["limit"] = limit

        try:
            async with self._client() as client:
                response = await request_with_retry(
                    client.get,
                    f"/{table}",
                    params=params,
                    retry_config=self._retry_config,
                )
            payload = response.json()
        except httpx.HTTPError as exc:
            raise SupabaseError(f"Supabase select on '{table}' failed: {exc}") from exc
        except ValueError as exc:
            raise SupabaseError(
                f"Supabase select on '{table}' returned invalid JSON"
            ) from exc

        if payload is None:
            return []
        if not isinstance(payload, list):
            raise SupabaseError(
                f"Supabase select on '{table}' returned {type(payload).__name__}, "
                "expected a list of rows"
            )
        return payload

    async def insert(self, table: str, row: Dict[str, Any]) -> None:
        """Insert a single row without asking for the stored representation."""
        try:
            async with self._client() as client:
                await request_with_retry(
                    client.post,
                    f"/{table}",
                    json=row,
                    headers={"Prefer": "return=minimal"},
                    retry_config=SINGLE_ATTEMPT,
                )
        except httpx.HTTPError as exc:
            raise SupabaseError(f"Supabase insert into '{table}' failed: {exc}") from exc


__all__ = ["SupabaseClient", "SupabaseError"]
