"""Heuristic response scoring.

The score is a weighted keyword count over the response text, starting from a
baseline chosen by a crude modern/legacy classification of the input code.
All keyword lists and weights are read from ``data/scoring.toml``.
"""

from __future__ import annotations

import tomllib
from datetime import datetime, timezone
from functools import lru_cache
from importlib import resources
from typing import Any

from modernizer.models.analysis import AnalysisCategory, MetricsRecord


@lru_cache(maxsize=1)
def load_scoring_table() -> dict[str, Any]:
    """Load the packaged keyword/weight table."""
    data = resources.files("modernizer").joinpath("data", "scoring.toml").read_bytes()
    return tomllib.loads(data.decode("utf-8"))


def _count_matches(text: str, needles: list[str]) -> int:
    # Each needle counts once, however often it occurs.
    return sum(1 for needle in needles if needle in text)


def detect_modern_code(code: str | None) -> bool:
    """Return True when the code looks like modern JavaScript."""
    if not code:
        return False

    classifier = load_scoring_table()["classifier"]
    modern_count = _count_matches(code, classifier["modern"])
    legacy_count = _count_matches(code, classifier["legacy"])
    return modern_count > legacy_count and modern_count >= classifier["min_modern"]


def category_keywords(category: str) -> dict[str, list[str]]:
    """Negative/positive keyword lists for a category, with the default fallback."""
    table = load_scoring_table()
    keywords = table["keywords"]
    return keywords.get(category) or keywords[table["default_category"]]


def calculate_metrics(
    category: str,
    response_text: str | None,
    input_code: str | None = "",
    is_modern: bool | None = None,
) -> MetricsRecord:
    """Score a response and derive the display metrics.

    Never raises: empty text scores as the baseline plus whatever bonuses
    apply, and an unknown category is scored with the default keyword table
    while keeping its own label.

    Pass ``is_modern`` to skip classifying ``input_code`` again.
    """
    table = load_scoring_table()
    response_lower = (response_text or "").lower()

    if is_modern is None:
        is_modern = detect_modern_code(input_code)
    baseline_kind = "modern" if is_modern else "legacy"
    score = table["baseline"][baseline_kind]

    keywords = category_keywords(category)
    negative_count = _count_matches(response_lower, keywords["negative"])
    positive_count = _count_matches(response_lower, keywords["positive"])

    weights = table["weights"][baseline_kind]
    score -= negative_count * weights["negative"]
    score += positive_count * weights["positive"]

    bonus = table["bonus"]
    has_code_examples = any(marker in response_lower for marker in bonus["code_examples"])
    has_recommendations = any(marker in response_lower for marker in bonus["recommendations"])
    has_metrics = any(marker in response_lower for marker in bonus["metrics"])
    for flag in (has_code_examples, has_recommendations, has_metrics):
        if flag:
            score += bonus["points"]

    score = max(0, min(100, score))

    if category == AnalysisCategory.MODERNIZATION.value:
        modernization_level = score
    else:
        modernization_level = min(100, score + 20)

    return MetricsRecord(
        overall_score=score,
        improvement_potential=100 - score,
        code_quality=score,
        modernization_level=modernization_level,
        issues_found=negative_count,
        improvements_suggested=positive_count,
        has_code_examples=has_code_examples,
        has_specific_recommendations=has_recommendations,
        has_metrics=has_metrics,
        category=category,
        timestamp=datetime.now(timezone.utc),
    )


def error_metrics(category: str) -> MetricsRecord:
    """Metrics attached to a category whose analysis failed."""
    return MetricsRecord(
        overall_score=0,
        improvement_potential=100,
        code_quality=0,
        modernization_level=0,
        issues_found=1,
        improvements_suggested=0,
        has_code_examples=False,
        has_specific_recommendations=False,
        has_metrics=False,
        category=category,
        timestamp=datetime.now(timezone.utc),
    )
