"""
Subword tokenizers used for prompt budgeting.

Counting and truncation must go through the same vocabulary, so both are
exposed on one object.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

import tiktoken

from ..errors import TokenizationError


class Tokenizer(ABC):
    """
    Abstract base class for subword tokenizers.
    """

    @abstractmethod
    def encode(self, text: str) -> List[int]:
        """Encode text into token ids.

        Raises:
            TokenizationError: if the text cannot be encoded.
        """
        pass

    @abstractmethod
    def decode(self, tokens: Sequence[int]) -> str:
        """Decode token ids back into text. Partial characters are replaced, not rejected."""
        pass

    def count(self, text: str) -> int:
        return len(self.encode(text))


class TiktokenTokenizer(Tokenizer):
    """BPE tokenizer backed by tiktoken. Defaults to the GPT-3 vocabulary."""

    def __init__(self, encoding_name: str = "r50k_base"):
        self.encoding_name = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    def encode(self, text: str) -> List[int]:
        try:
            # Caller text like "<|endoftext|>" is ordinary text, not a control token.
            return self._encoding.encode(text, disallowed_special=())
        except ValueError as e:
            raise TokenizationError(str(e)) from e

    def decode(self, tokens: Sequence[int]) -> str:
        return self._encoding.decode(list(tokens))
