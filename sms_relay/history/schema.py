from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Turn:
    """A single utterance in a caller's conversation."""
    speaker: str  # "User" or the agent name
    text: str


@dataclass
class ChatHistory:
    """Ordered turn log plus the agent/prompt selection for one caller."""
    caller_id: str
    agent_name: str
    prompt_id: str
    turns: List[Turn] = field(default_factory=list)
