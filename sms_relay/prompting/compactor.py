"""
Transcript compaction: fit an unbounded chat history into a fixed
token budget by keeping its most recent tokens.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .template import INPUT_VARIABLE, has_placeholder, placeholder, render_template
from .tokenizer import Tokenizer
from ..errors import InvalidTemplateError
from ..history import Turn

logger = logging.getLogger(__name__)


@dataclass
class CompactedPrompt:
    """Result of compacting a transcript into a template."""
    prompt: str
    transcript: str
    template_tokens: int
    transcript_tokens: int  # before truncation
    retained_tokens: int  # after truncation

    @property
    def dropped_tokens(self) -> int:
        return self.transcript_tokens - self.retained_tokens


def format_turns(turns: Iterable[Turn]) -> str:
    """One ``speaker: text`` line per turn, oldest first."""
    return "\n".join(f"{turn.speaker}: {turn.text}" for turn in turns)


class PromptCompactor:
    """
    Builds budget-bounded prompts from chat transcripts.

    The template is counted with its placeholder still in place; whatever is
    left of ``max_tokens`` goes to the transcript. When the transcript is too
    long, tokens are dropped from the beginning so the newest turns survive.
    The cut can land mid-word or mid-turn; that is accepted.
    """

    def __init__(self, tokenizer: Tokenizer, max_tokens: int = 4000):
        self.tokenizer = tokenizer
        self.max_tokens = max_tokens

    def truncate_left(self, text: str, max_tokens: int) -> str:
        """Keep at most the last `max_tokens` tokens of `text`."""
        tokens = self.tokenizer.encode(text)
        return self._keep_tail(text, tokens, max_tokens)

    def _keep_tail(self, text: str, tokens: List[int], max_tokens: int) -> str:
        if max_tokens <= 0:
            return ""
        if len(tokens) <= max_tokens:
            return text

        start = len(tokens) - max_tokens
        while start < len(tokens):
            tail = self.tokenizer.decode(tokens[start:])
            # A slice through a multi-byte character can decode into text
            # that re-encodes longer than the slice itself.
            if self.tokenizer.count(tail) <= max_tokens:
                return tail
            start += 1
        return ""

    def compact(self, turns: Iterable[Turn], template: str) -> CompactedPrompt:
        """
        Render `template` with as much of the transcript as fits.

        Raises:
            InvalidTemplateError: if the template lacks the input placeholder.
            TokenizationError: if the template or transcript cannot be encoded.
        """
        if not has_placeholder(template):
            raise InvalidTemplateError(f"Template has no {placeholder()} placeholder")

        template_tokens = self.tokenizer.count(template)
        budget = max(self.max_tokens - template_tokens, 0)

        transcript = format_turns(turns)
        tokens = self.tokenizer.encode(transcript)
        retained = self._keep_tail(transcript, tokens, budget)
        if len(tokens) <= budget:
            retained_tokens = len(tokens)
        else:
            retained_tokens = self.tokenizer.count(retained)

        if retained_tokens < len(tokens):
            logger.info(
                "Transcript truncated: %d -> %d tokens (template=%d, budget=%d)",
                len(tokens), retained_tokens, template_tokens, budget,
            )

        prompt = render_template(template, {INPUT_VARIABLE: retained})
        return CompactedPrompt(
            prompt=prompt,
            transcript=retained,
            template_tokens=template_tokens,
            transcript_tokens=len(tokens),
            retained_tokens=retained_tokens,
        )

    def build_prompt(self, turns: Iterable[Turn], template: str) -> str:
        return self.compact(turns, template).prompt
