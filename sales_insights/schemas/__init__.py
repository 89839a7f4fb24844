"""Public schema exports."""

from .analysis import AnalysisError, AnalysisResult, AnalyzeRequest, ContextResponse

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "AnalyzeRequest",
    "ContextResponse",
]
