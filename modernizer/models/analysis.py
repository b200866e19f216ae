"""Analysis-related data models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisCategory(str, Enum):
    MODERNIZATION = "modernization"
    TRANSFORMATION = "transformation"
    ARCHITECTURE = "architecture"
    PERFORMANCE = "performance"
    SECURITY = "security"
    DOCUMENTATION = "documentation"
    CICD = "cicd"
    COMPLEXITY = "complexity"
    REPORTING = "reporting"


class OutcomeStatus(str, Enum):
    OK = "ok"
    DEMO = "demo"
    INVALID_KEY = "invalid_key"
    QUOTA_EXCEEDED = "quota_exceeded"
    ERROR = "error"


class MetricsRecord(CamelModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int
    improvement_potential: int
    code_quality: int
    modernization_level: int
    issues_found: int
    improvements_suggested: int
    has_code_examples: bool
    has_specific_recommendations: bool
    has_metrics: bool
    category: str  # may be an unrecognized label
    timestamp: datetime


class AnalysisResult(CamelModel):
    model_config = ConfigDict(frozen=True)

    category: str
    result: str
    score: int
    metrics: MetricsRecord


class CategoryOutcome(CamelModel):
    """One entry of the bulk analysis map."""

    result: str
    score: int
    metrics: MetricsRecord
    status: OutcomeStatus = OutcomeStatus.OK


class AnalyzeResponse(CamelModel):
    success: bool = True
    analysis_type: str
    result: str
    score: int
    metrics: MetricsRecord
    timestamp: datetime
    demo_mode: bool = False


class AnalyzeAllResponse(CamelModel):
    success: bool = True
    results: dict[str, CategoryOutcome]
    timestamp: datetime
    demo_mode: bool = False


class AnalysisTypeInfo(BaseModel):
    id: str
    name: str
    description: str


class ErrorResponse(CamelModel):
    error: str
    details: str | None = None
    help_url: str | None = None
