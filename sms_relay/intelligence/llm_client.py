"""
LLM Client: async client for OpenAI-compatible text completion APIs.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .retry import retrying
from .schema import ModelParameters
from ..config import LLMConfig
from ..errors import UpstreamError

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Async completion client using httpx.
    Submits a prompt plus sampling parameters and returns the generated text.
    """

    def __init__(self, config: LLMConfig, backoff: float = 1.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.backoff = backoff
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self):
        """Create the HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(self.config.timeout, connect=10.0),
            transport=self._transport,
        )
        logger.info("Completion client initialized (model=%s)", self.config.model)

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _build_payload(self, prompt: str, params: ModelParameters) -> Dict[str, Any]:
        payload = {
            "model": params.model or self.config.model,
            "prompt": prompt,
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
            "top_p": params.top_p,
            "frequency_penalty": params.frequency_penalty,
            "presence_penalty": params.presence_penalty,
        }
        if params.stop:
            payload["stop"] = list(params.stop)
        return payload

    async def complete(self, prompt: str, params: Optional[ModelParameters] = None) -> str:
        """
        Send a prompt to the completion endpoint and return the stripped text
        of the first choice.

        Raises:
            UpstreamError: if the API key is missing, the request keeps failing
                after retries, or the response is malformed.
        """
        if not self._client:
            raise RuntimeError("Completion client not initialized")
        if not self.config.api_key:
            raise UpstreamError("No completion API key configured")

        payload = self._build_payload(prompt, params or ModelParameters())

        try:
            async for attempt in retrying(self.config.max_retries, self.backoff):
                with attempt:
                    response = await self._client.post("/completions", json=payload)
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Completion request failed: HTTP %d", e.response.status_code)
            raise UpstreamError(f"Completion API returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Completion request failed: %s: %s", type(e).__name__, e)
            raise UpstreamError(f"Completion API unreachable: {type(e).__name__}") from e

        try:
            data = response.json()
            text = data["choices"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError("Malformed completion response") from e

        text = (text or "").strip()
        logger.info("Completion received (%d chars)", len(text))
        return text
