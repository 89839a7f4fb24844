"""Expose constructed client wrappers."""

from .gemini import GeminiClient, GeminiModelError
from .supabase import SupabaseClient, SupabaseError

__all__ = [
    "GeminiClient",
    "GeminiModelError",
    "SupabaseClient",
    "SupabaseError",
]
