"""
Pydantic models for sales analysis and context lookup requests.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalyzeRequest(BaseModel):
    """Incoming payload for a sales analysis."""

    model_config = ConfigDict(populate_by_name=True)

    sales_data: Any = Field(
        None,
        alias="salesData",
        description="Raw sales text, a list of records, or a single record object.",
    )
    analysis_type: Optional[str] = Field(
        "trends",
        alias="analysisType",
        description="Focus of the analysis: trends, pipeline, or communications.",
    )
    filters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Context filters such as customer, brand, or season.",
    )

    @field_validator("filters", mode="before")
    @classmethod
    def _default_filters(cls, value: Any) -> Any:
        """Treat an explicit null the same as omitting the filters."""
        return {} if value is None else value


class AnalysisResult(BaseModel):
    """Successful model-backed analysis."""

    result: str = Field(..., description="Narrative produced by the language model.")


class AnalysisError(BaseModel):
    """Error envelope; ``data`` carries the local summary when one exists."""

    error: str = Field(..., description="User-safe description of the failure.")
    data: Optional[str] = Field(
        None, description="Local summary returned when no AI provider is configured."
    )


class ContextResponse(BaseModel):
    """Suggestion lists used to populate filter inputs."""

    source: Literal["supabase", "sample"] = Field(
        ..., description="Where the suggestions were read from."
    )
    customers: List[str] = Field(default_factory=list)
    brands: List[str] = Field(default_factory=list)
    seasons: List[str] = Field(default_factory=list)
