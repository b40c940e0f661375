"""
Prompt template providers.

A prompt id resolves to a template containing an ``{{input}}`` marker and
the model parameters to use with it. Templates come either from a remote
deployment service or from a local JSON file.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from .retry import retrying
from .schema import ModelParameters, PromptSpec
from ..config import PromptConfig
from ..errors import PromptNotFoundError, UpstreamError

logger = logging.getLogger(__name__)


def _spec_from_record(prompt_id: str, record: Any) -> PromptSpec:
    if not isinstance(record, dict) or not isinstance(record.get("text"), str):
        raise UpstreamError(f"Malformed prompt record for {prompt_id!r}")
    return PromptSpec(
        template_text=record["text"],
        parameters=ModelParameters.from_dict(record.get("config")),
    )


class PromptProvider(ABC):
    """
    Abstract base class for prompt template sources.
    """

    async def initialize(self) -> None:
        """Allocate clients or load files."""
        pass

    async def close(self) -> None:
        pass

    @abstractmethod
    async def get_prompt(self, prompt_id: str) -> PromptSpec:
        """
        Resolve a prompt id.

        Raises:
            PromptNotFoundError: if the id is unknown.
            UpstreamError: if the source cannot be reached or returns garbage.
        """
        pass


class HttpPromptProvider(PromptProvider):
    """Fetches the active deployment of a prompt from a remote service."""

    def __init__(self, config: PromptConfig, backoff: float = 1.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.backoff = backoff
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self):
        headers = {}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=headers,
            timeout=httpx.Timeout(self.config.timeout, connect=5.0),
            transport=self._transport,
        )
        logger.info("Prompt provider initialized (%s)", self.config.base_url)

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get_prompt(self, prompt_id: str) -> PromptSpec:
        if not self._client:
            raise RuntimeError("Prompt provider not initialized")

        path = f"/prompt/{prompt_id}/deployment/active"
        try:
            async for attempt in retrying(self.config.max_retries, self.backoff):
                with attempt:
                    response = await self._client.get(path)
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise PromptNotFoundError(prompt_id) from e
            logger.error("Prompt fetch failed for %s: HTTP %d", prompt_id, e.response.status_code)
            raise UpstreamError(f"Prompt service returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Prompt fetch failed for %s: %s", prompt_id, e)
            raise UpstreamError(f"Prompt service unreachable: {type(e).__name__}") from e

        try:
            record = response.json()
        except ValueError as e:
            raise UpstreamError(f"Prompt service returned invalid JSON for {prompt_id!r}") from e
        return _spec_from_record(prompt_id, record)


class LocalPromptProvider(PromptProvider):
    """
    Serves prompts from a JSON file of the form
    ``{"<prompt_id>": {"text": "...{{input}}...", "config": {...}}}``.
    """

    def __init__(self, path: str, prompts: Optional[Dict[str, Any]] = None):
        self.path = Path(path)
        self._prompts: Dict[str, Any] = dict(prompts) if prompts is not None else {}
        self._loaded = prompts is not None

    async def initialize(self):
        if self._loaded:
            return
        try:
            self._prompts = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise UpstreamError(f"Cannot load prompts from {self.path}: {e}") from e
        self._loaded = True
        logger.info("Loaded %d prompts from %s", len(self._prompts), self.path)

    async def get_prompt(self, prompt_id: str) -> PromptSpec:
        if prompt_id not in self._prompts:
            raise PromptNotFoundError(prompt_id)
        return _spec_from_record(prompt_id, self._prompts[prompt_id])


def create_prompt_provider(config: PromptConfig) -> PromptProvider:
    """
    Factory method to instantiate the prompt provider selected by config.
    """
    source = config.source.lower()

    if source == "http":
        return HttpPromptProvider(config)
    elif source == "local":
        return LocalPromptProvider(config.local_path)
    else:
        raise ValueError(f"Unknown prompt source: {source}")
