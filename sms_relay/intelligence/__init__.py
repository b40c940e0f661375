from .llm_client import CompletionClient
from .prompt_provider import (
    HttpPromptProvider,
    LocalPromptProvider,
    PromptProvider,
    create_prompt_provider,
)
from .schema import ModelParameters, PromptSpec

__all__ = [
    "CompletionClient",
    "HttpPromptProvider",
    "LocalPromptProvider",
    "ModelParameters",
    "PromptProvider",
    "PromptSpec",
    "create_prompt_provider",
]
