"""Client wrapper for interacting with Google Gemini models."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPICallError, NotFound

from sales_insights.core.config import GeminiSettings


_TEXT_FALLBACKS: tuple[str, ...] = (
    "gemini-1.5-flash",
    "gemini-1.5-pro",
)

logger = logging.getLogger(__name__)


class GeminiModelError(RuntimeError):
    """Raised when Gemini cannot produce an analysis for a request."""


class GeminiClient:
    """Generate sales narratives with the configured Gemini text model."""

    def __init__(self, settings: GeminiSettings) -> None:
        if not settings.api_key:
            raise GeminiModelError("GEMINI_API_KEY is required to use Gemini.")
        self._settings = settings
        # Configure the global client once per process.
        genai.configure(api_key=settings.api_key)

    async def generate_analysis(self, *, system_instruction: str, content: str) -> str:
        """Run a single-turn completion and return the stripped response text."""
        generation_config = genai.GenerationConfig(
            temperature=self._settings.temperature,
            max_output_tokens=self._settings.max_output_tokens,
        )

        def _invoke() -> str:
            response = self._invoke_with_models(
                models=self._text_model_candidates(),
                system_instruction=system_instruction,
                call=lambda model: model.generate_content(
                    [{"role": "user", "parts": [content]}],
                    generation_config=generation_config,
                ),
            )
            try:
                text = response.text
            except ValueError as exc:
                # The SDK raises when the candidate was blocked or carries no text.
                raise GeminiModelError(
                    f"Gemini returned no usable text: {exc}"
                ) from exc
            return (text or "").strip()

        return await asyncio.to_thread(_invoke)

    def _invoke_with_models(
        self,
        *,
        models: Iterable[str],
        system_instruction: str,
        call: Callable[[genai.GenerativeModel], Any],
    ) -> Any:
        """Try the configured model followed by fallbacks when available."""

        model_sequence = list(models)
        last_not_found: NotFound | None = None
        for index, model_name in enumerate(model_sequence):
            generative_model = genai.GenerativeModel(
                model_name,
                system_instruction=system_instruction,
            )
            try:
                return call(generative_model)
            except NotFound as exc:  # pragma: no cover - network call
                last_not_found = exc
                logger.warning(
                    "Gemini model '%s' not found (attempt %d/%d); trying fallback.",
                    model_name,
                    index + 1,
                    len(model_sequence),
                )
                continue
            except GoogleAPICallError as exc:  # pragma: no cover - network call
                raise GeminiModelError(
                    f"Gemini generate_content failed: {exc.message}"
                ) from exc

        if last_not_found is not None:
            primary = model_sequence[0] if model_sequence else "unknown"
            raise GeminiModelError(
                f"Gemini model '{primary}' is not available. "
                "Update GEMINI_MODEL_NAME to a supported value."
            ) from last_not_found

        raise GeminiModelError("Gemini generate_content failed: no model configured.")

    def _text_model_candidates(self) -> list[str]:
        """Return distinct model names prioritizing the configured value."""
        seen: set[str] = set()
        candidates: list[str] = []
        for name in (self._settings.model_name, *_TEXT_FALLBACKS):
            cleaned = (name or "").strip()
            if not cleaned or cleaned in seen:
                continue
            seen.add(cleaned)
            candidates.append(cleaned)
        return candidates


__all__ = ["GeminiClient", "GeminiModelError"]
