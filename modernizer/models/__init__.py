"""Pydantic data models for the analyzer API."""

from modernizer.models.analysis import (
    AnalysisCategory,
    AnalysisResult,
    AnalysisTypeInfo,
    AnalyzeAllResponse,
    AnalyzeResponse,
    CategoryOutcome,
    ErrorResponse,
    MetricsRecord,
    OutcomeStatus,
)
from modernizer.models.features import CodeFeatures

__all__ = [
    "AnalysisCategory",
    "AnalysisResult",
    "AnalysisTypeInfo",
    "AnalyzeAllResponse",
    "AnalyzeResponse",
    "CategoryOutcome",
    "CodeFeatures",
    "ErrorResponse",
    "MetricsRecord",
    "OutcomeStatus",
]
