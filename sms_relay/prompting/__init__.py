from .compactor import CompactedPrompt, PromptCompactor, format_turns
from .template import render_template
from .tokenizer import TiktokenTokenizer, Tokenizer

__all__ = [
    "CompactedPrompt",
    "PromptCompactor",
    "TiktokenTokenizer",
    "Tokenizer",
    "format_turns",
    "render_template",
]
