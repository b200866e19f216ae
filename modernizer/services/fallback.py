"""Offline responder: templated analysis text without a model call.

Used for the demo key and for bulk entries whose Gemini call ran out of
quota. The text is shaped like a model answer and scored like one.
"""

from __future__ import annotations

import re
import tomllib
from functools import lru_cache
from importlib import resources
from string import Template
from typing import Any

from modernizer.models.features import CodeFeatures
from modernizer.services.scorer import detect_modern_code

_BLOCK_SCOPE = re.compile(r"\b(?:const|let)\s+\w")
_ARROW = re.compile(r"=>")
_ASYNC = re.compile(r"\b(?:async|await)\b")
_MODULES = re.compile(r"^[ \t]*(?:import\s|export\s)|\brequire\(", re.MULTILINE)
_CLASSES = re.compile(r"\bclass\s+\w")
_TRY = re.compile(r"\btry\s*[{:]")
_CATCH = re.compile(r"\b(?:catch|except)\b")
_CONSOLE = re.compile(r"\bconsole\.(?:log|debug|info|warn|error)\s*\(")
_DOC_COMMENTS = re.compile(r"/\*\*|\"\"\"|'''")
_FUNCTIONS = re.compile(r"\bfunction\b|=>|\bdef\s+\w+")
_VARIABLES = re.compile(r"\b(?:var|let|const)\s+\w")


@lru_cache(maxsize=1)
def load_templates() -> dict[str, Any]:
    data = resources.files("modernizer").joinpath("data", "fallback.toml").read_bytes()
    return tomllib.loads(data.decode("utf-8"))


def detect_features(code: str | None) -> CodeFeatures:
    """Presence checks and simple counts; no parsing."""
    if not code:
        return CodeFeatures()

    return CodeFeatures(
        block_scope=bool(_BLOCK_SCOPE.search(code)),
        arrow_functions=bool(_ARROW.search(code)),
        async_usage=bool(_ASYNC.search(code)),
        modules=bool(_MODULES.search(code)),
        classes=bool(_CLASSES.search(code)),
        error_handling=bool(_TRY.search(code) and _CATCH.search(code)),
        console_debug=bool(_CONSOLE.search(code)),
        doc_comments=bool(_DOC_COMMENTS.search(code)),
        line_count=len(code.splitlines()),
        function_count=len(_FUNCTIONS.findall(code)),
        variable_count=len(_VARIABLES.findall(code)),
        is_modern=detect_modern_code(code),
    )


def _feature_bullets(features: CodeFeatures, table: dict[str, Any]) -> tuple[list[str], list[str]]:
    strengths: list[str] = []
    issues: list[str] = []
    for name, entry in table["features"].items():
        present = getattr(features, name)
        if present:
            (strengths if entry["positive"] else issues).append(entry["present"])
        else:
            (issues if entry["positive"] else strengths).append(entry["absent"])
    return strengths, issues


def render_fallback(
    category: str,
    code: str | None = "",
    features: CodeFeatures | None = None,
) -> str:
    """Render the offline analysis text for a category.

    An unknown category gets the default template. Pass ``features`` when
    rendering several categories for the same code.
    """
    table = load_templates()
    categories = table["categories"]
    template = categories.get(category) or categories[table["default_category"]]

    if features is None:
        features = detect_features(code)
    strengths, issues = _feature_bullets(features, table)

    return Template(table["layout"]).safe_substitute(
        title=template["title"],
        line_count=features.line_count,
        function_count=features.function_count,
        variable_count=features.variable_count,
        strengths="\n".join(strengths) or table["no_strengths"],
        issues="\n".join(issues) or table["no_issues"],
        recommendations=template["recommendations"],
        score_label=template["score_label"],
        verdict=template["modern_verdict"] if features.is_modern else template["legacy_verdict"],
    )
