"""Code analysis routes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from modernizer.config import Settings, get_settings
from modernizer.models.analysis import (
    AnalysisTypeInfo,
    AnalyzeAllResponse,
    AnalyzeResponse,
    ErrorResponse,
)
from modernizer.services.dispatcher import analyze, analyze_all, demo_all, demo_result
from modernizer.services.gemini_client import (
    GeminiClient,
    GeminiError,
    InvalidApiKeyError,
    QuotaExceededError,
    create_gemini_client,
)
from modernizer.services.prompts import ANALYSIS_PROMPTS, list_analysis_types
from modernizer.services.uploads import UploadRejectedError, read_upload

logger = logging.getLogger(__name__)

router = APIRouter()

ClientFactory = Callable[[str], GeminiClient]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    415: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_client_factory(settings: Settings = Depends(get_settings)) -> ClientFactory:
    """Build a Gemini client per request from the caller's key."""

    def factory(api_key: str) -> GeminiClient:
        return create_gemini_client(api_key, settings.gemini_model)

    return factory


def error_response(
    status_code: int,
    error: str,
    details: str | None = None,
    help_url: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, details=details, help_url=help_url)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


async def _resolve_code(code: str | None, file: UploadFile | None, settings: Settings) -> str:
    # An uploaded file takes precedence over the text field.
    if file is not None and file.filename:
        return await read_upload(file, settings.max_upload_bytes, settings.allowed_extensions)
    if file is not None:
        await file.close()
    return code or ""


@router.post("/analyze", response_model=AnalyzeResponse, responses=ERROR_RESPONSES)
async def analyze_code(
    analysis_type: str = Form("", alias="analysisType"),
    api_key: str = Form("", alias="apiKey"),
    code: str | None = Form(None),
    file: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    client_factory: ClientFactory = Depends(get_client_factory),
):
    """Analyze code for a single category."""
    if not api_key:
        return error_response(400, "API key is required")

    try:
        code_content = await _resolve_code(code, file, settings)
    except UploadRejectedError as e:
        return error_response(e.status_code, e.message, e.details)

    if api_key == settings.demo_key:
        logger.info(f"Demo mode analysis for {analysis_type!r}")
        result = demo_result(analysis_type, code_content)
        return AnalyzeResponse(
            analysis_type=analysis_type,
            result=result.result,
            score=result.score,
            metrics=result.metrics,
            timestamp=datetime.now(timezone.utc),
            demo_mode=True,
        )

    if not code_content:
        return error_response(400, "No code provided")

    if analysis_type not in ANALYSIS_PROMPTS:
        return error_response(400, "Invalid analysis type")

    gemini = client_factory(api_key)
    try:
        result = await analyze(gemini, analysis_type, code_content)
    except InvalidApiKeyError:
        return error_response(
            400,
            "Invalid API Key",
            "Your Google Gemini API key is invalid or expired. Please check your API key "
            "at Google AI Studio and try again.",
            settings.help_url,
        )
    except QuotaExceededError:
        return error_response(
            429,
            "API Quota Exceeded",
            "Your Google Gemini API quota has been exceeded. Please try again later "
            "or upgrade your API plan.",
            settings.help_url,
        )
    except GeminiError as e:
        logger.error(f"Analysis failed for {analysis_type}: {e}")
        return error_response(500, "Analysis failed", str(e))
    finally:
        await gemini.aclose()

    return AnalyzeResponse(
        analysis_type=analysis_type,
        result=result.result,
        score=result.score,
        metrics=result.metrics,
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/analyze-all", response_model=AnalyzeAllResponse, responses=ERROR_RESPONSES)
async def analyze_all_categories(
    api_key: str = Form("", alias="apiKey"),
    code: str | None = Form(None),
    file: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    client_factory: ClientFactory = Depends(get_client_factory),
):
    """Analyze code for every category concurrently."""
    if not api_key:
        return error_response(400, "API key is required")

    try:
        code_content = await _resolve_code(code, file, settings)
    except UploadRejectedError as e:
        return error_response(e.status_code, e.message, e.details)

    if api_key == settings.demo_key:
        logger.info("Demo mode analysis for all categories")
        return AnalyzeAllResponse(
            results=demo_all(code_content),
            timestamp=datetime.now(timezone.utc),
            demo_mode=True,
        )

    if not code_content:
        return error_response(400, "No code provided")

    gemini = client_factory(api_key)
    try:
        results = await analyze_all(gemini, code_content, help_url=settings.help_url)
    finally:
        await gemini.aclose()
    return AnalyzeAllResponse(results=results, timestamp=datetime.now(timezone.utc))


@router.get("/analysis-types", response_model=list[AnalysisTypeInfo])
async def analysis_types() -> list[AnalysisTypeInfo]:
    """List the supported analysis categories."""
    return list_analysis_types()
