"""Gemini API client wrapper.

A client is built per request from the caller's key; nothing is shared
between requests.
"""

from __future__ import annotations

import logging

from google import genai
from google.genai import errors

logger = logging.getLogger(__name__)

INVALID_KEY_MARKERS = ("API_KEY_INVALID", "INVALID_API_KEY", "API key not valid", "401")
QUOTA_MARKERS = ("429", "quota", "QUOTA_EXCEEDED", "RESOURCE_EXHAUSTED")


class GeminiError(Exception):
    """Base class for failures of a Gemini call."""


class InvalidApiKeyError(GeminiError):
    """The key was rejected (invalid, expired or unauthorized)."""


class QuotaExceededError(GeminiError):
    """The key's quota or rate limit is exhausted."""


class UpstreamError(GeminiError):
    """Any other failure of the Gemini call."""


def classify_error(exc: Exception) -> GeminiError:
    """Map an SDK exception onto the service's error taxonomy."""
    if isinstance(exc, GeminiError):
        return exc

    message = str(exc)
    code = getattr(exc, "code", None) if isinstance(exc, errors.APIError) else None

    if code in (401, 403) or any(marker in message for marker in INVALID_KEY_MARKERS):
        return InvalidApiKeyError(message)
    if code == 429 or any(marker in message for marker in QUOTA_MARKERS):
        return QuotaExceededError(message)
    return UpstreamError(message)


class GeminiClient:
    """Wrapper around the google-genai SDK for code analysis prompts."""

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash"):
        self.client = genai.Client(api_key=api_key)
        self.model = model

    async def generate(self, prompt: str) -> str:
        """Send a prompt to Gemini and return the plain-text completion.

        Raises a ``GeminiError`` subclass on failure; never retries.
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise classify_error(e) from e

        return (response.text or "").strip()

    async def aclose(self) -> None:
        """Release the SDK's sync and async connection pools."""
        await self.client.aio.aclose()
        self.client.close()


def create_gemini_client(api_key: str, model: str) -> GeminiClient:
    return GeminiClient(api_key=api_key, model=model)
