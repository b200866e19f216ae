"""Analysis dispatch: prompt → Gemini → scorer."""

from __future__ import annotations

import asyncio
import logging

from modernizer.models.analysis import AnalysisResult, CategoryOutcome, OutcomeStatus
from modernizer.models.features import CodeFeatures
from modernizer.services.fallback import detect_features, render_fallback
from modernizer.services.gemini_client import (
    GeminiClient,
    InvalidApiKeyError,
    QuotaExceededError,
    classify_error,
)
from modernizer.services.prompts import ANALYSIS_PROMPTS, build_prompt
from modernizer.services.scorer import calculate_metrics, error_metrics

logger = logging.getLogger(__name__)


async def analyze(client: GeminiClient, category: str, code: str) -> AnalysisResult:
    """Run one category against Gemini and score the answer.

    Raises ``InvalidAnalysisTypeError`` for an unknown category and any
    ``GeminiError`` from the client unchanged.
    """
    prompt = build_prompt(category, code)
    text = await client.generate(prompt)
    metrics = calculate_metrics(category, text, code)
    return AnalysisResult(
        category=category,
        result=text,
        score=metrics.overall_score,
        metrics=metrics,
    )


def _failure_outcome(category: str, error: Exception, code: str, help_url: str) -> CategoryOutcome:
    if isinstance(error, InvalidApiKeyError):
        status = OutcomeStatus.INVALID_KEY
        text = (
            "❌ **Invalid API Key Error**\n\n"
            "Your Google Gemini API key is invalid or expired. Please:\n"
            f"1. Check your API key at [Google AI Studio]({help_url})\n"
            "2. Generate a new API key if needed\n"
            "3. Make sure the key has proper permissions\n\n"
            f"**Error Details:** {error}"
        )
    elif isinstance(error, QuotaExceededError):
        status = OutcomeStatus.QUOTA_EXCEEDED
        text = (
            "❌ **API Quota Exceeded**\n\n"
            "Your Google Gemini API quota has been exceeded. Please try again later "
            "or upgrade your API plan. An offline analysis is shown below.\n\n"
            f"**Error Details:** {error}\n\n---\n\n"
            f"{render_fallback(category, code)}"
        )
    else:
        status = OutcomeStatus.ERROR
        text = f"❌ **Analysis Error**\n\nAn error occurred during analysis: {error}"

    return CategoryOutcome(result=text, score=0, metrics=error_metrics(category), status=status)


async def _analyze_contained(
    client: GeminiClient,
    category: str,
    code: str,
    help_url: str,
) -> tuple[str, CategoryOutcome]:
    try:
        result = await analyze(client, category, code)
    except Exception as e:
        logger.error(f"Error in {category} analysis: {e}")
        return category, _failure_outcome(category, classify_error(e), code, help_url)
    outcome = CategoryOutcome(result=result.result, score=result.score, metrics=result.metrics)
    return category, outcome


async def analyze_all(
    client: GeminiClient,
    code: str,
    help_url: str,
) -> dict[str, CategoryOutcome]:
    """Run every category concurrently.

    Each category's failure is folded into its own entry, so the map always
    holds one entry per category.
    """
    pairs = await asyncio.gather(
        *(_analyze_contained(client, category, code, help_url) for category in ANALYSIS_PROMPTS)
    )
    return dict(pairs)


def demo_result(category: str, code: str, features: CodeFeatures | None = None) -> AnalysisResult:
    if features is None:
        features = detect_features(code)
    text = render_fallback(category, code, features)
    metrics = calculate_metrics(category, text, code, is_modern=features.is_modern)
    return AnalysisResult(
        category=category,
        result=text,
        score=metrics.overall_score,
        metrics=metrics,
    )


def demo_all(code: str) -> dict[str, CategoryOutcome]:
    features = detect_features(code)
    results: dict[str, CategoryOutcome] = {}
    for category in ANALYSIS_PROMPTS:
        result = demo_result(category, code, features)
        results[category] = CategoryOutcome(
            result=result.result,
            score=result.score,
            metrics=result.metrics,
            status=OutcomeStatus.DEMO,
        )
    return results
