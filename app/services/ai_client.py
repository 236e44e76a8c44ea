# app/services/ai_client.py
"""Thin async wrapper around google-genai used for both search calls.

Only this module talks to the SDK. Whatever the SDK (or the HTTP transport
below it) raises is turned into a TransportFailure carrying the raw failure
text, so the services above never inspect untyped exceptions.
"""
from typing import Any, Dict, Optional, Protocol

import structlog
from google import genai
from google.genai import types

from app.core.config import settings
from app.services.errors import TransportFailure

logger = structlog.get_logger(__name__)


class TextCompletionClient(Protocol):
    """Anything that turns a prompt plus a response schema into raw text."""
    async def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> str: ...


class GeminiTextClient:
    def __init__(self, api_key: Optional[str], model: str = settings.GEMINI_MODEL, client: Optional[genai.Client] = None):
        if not api_key and client is None:
            raise ValueError("GEMINI_API_KEY is not set in the environment")
        self.model = model
        self._client = client or genai.Client(api_key=api_key)

    async def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            provider_status = getattr(e, "code", None)
            logger.error(
                "gemini_request_failed",
                model=self.model,
                error=str(e),
                error_type=type(e).__name__,
                provider_status=provider_status,
            )
            raise TransportFailure(
                failure_text=str(e),
                provider_status=provider_status if isinstance(provider_status, int) else None,
            ) from e

        return response.text or ""
