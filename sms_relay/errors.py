"""
Error taxonomy for the relay.
"""


class RelayError(Exception):
    """Base class for all relay failures."""


class HistoryNotFoundError(RelayError):
    """An operation needed a chat history that does not exist."""

    def __init__(self, caller_id: str):
        super().__init__(f"No chat history for caller {caller_id!r}")
        self.caller_id = caller_id


class InvalidTemplateError(RelayError):
    """A prompt template is missing its substitution placeholder."""


class UpstreamError(RelayError):
    """The completion service or prompt provider failed or timed out."""


class PromptNotFoundError(UpstreamError):
    """The prompt provider has no template for the requested id."""

    def __init__(self, prompt_id: str):
        super().__init__(f"Prompt {prompt_id!r} not found")
        self.prompt_id = prompt_id


class TokenizationError(RelayError):
    """Text could not be encoded with the configured vocabulary."""
