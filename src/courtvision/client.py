"""
Gemini client for the single analysis call.

The client is constructed explicitly with its own configuration and owns the
HTTP connection pool it creates. Anything with an async `generate(payload)`
method can be passed to the agent instead (see `AnalysisBackend`).
"""

import logging
from typing import Optional, Protocol

import httpx

from .config import GeminiConfig
from .errors import AuthError, NetworkError, RequestError
from .prompts import AnalysisPayload

log = logging.getLogger(__name__)


class AnalysisBackend(Protocol):
    async def generate(self, payload: AnalysisPayload) -> str:
        ...


class GeminiClient:
    """Calls `models/{model}:generateContent` and returns the raw response text."""

    def __init__(
        self,
        config: GeminiConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/models/{self.config.model}:generateContent"

    def _body(self, payload: AnalysisPayload) -> dict:
        return {
            "systemInstruction": {"parts": [{"text": payload.system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": payload.query}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": payload.response_schema,
            },
        }

    async def generate(self, payload: AnalysisPayload) -> str:
        if not self.config.api_key:
            raise AuthError("No Gemini API key configured.")

        log.info("Calling %s (query_len=%d)", self.config.model, len(payload.query))
        try:
            resp = await self._client.post(
                self.endpoint,
                json=self._body(payload),
                headers={"x-goog-api-key": self.config.api_key},
                timeout=self.config.timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Gemini request timed out after {self.config.timeout_s}s") from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"Gemini request failed: {exc}") from exc

        if resp.status_code in (401, 403):
            raise AuthError(
                f"Gemini rejected the credentials ({resp.status_code})",
                status_code=resp.status_code,
            )
        if resp.is_error:
            log.warning("Gemini error %s: %s", resp.status_code, resp.text[:200])
            raise RequestError(
                f"Gemini returned {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError:
            log.warning("Gemini returned a non-JSON envelope")
            return ""
        return _candidate_text(data)


def _candidate_text(data: dict) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))
