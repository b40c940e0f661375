"""
Reset command detection.

A caller can start over by texting ``reset`` (default agent and prompt) or
``reset <prompt_id> <agent_name>`` to switch to another prompt deployment.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .history import ChatHistory, ChatHistoryStore

logger = logging.getLogger(__name__)

RESET_KEYWORD = "reset"
_RESET_WITH_ARGS = re.compile(r"reset\s+(\w+)\s+(\w+)", re.IGNORECASE | re.ASCII)


@dataclass(frozen=True)
class ResetCommand:
    prompt_id: str
    agent_name: str


def parse_reset(
    message: str,
    default_prompt_id: str,
    default_agent_name: str,
) -> Optional[ResetCommand]:
    """
    Recognize a reset request.

    The keyword is matched case-insensitively after trimming; the prompt id
    and agent name keep the case the caller typed. Returns None when the
    message is not a reset.
    """
    text = message.strip()
    if text.lower() == RESET_KEYWORD:
        return ResetCommand(prompt_id=default_prompt_id, agent_name=default_agent_name)

    match = _RESET_WITH_ARGS.fullmatch(text)
    if match:
        return ResetCommand(prompt_id=match.group(1), agent_name=match.group(2))
    return None


def handle_possible_reset(
    store: ChatHistoryStore,
    caller_id: str,
    message: str,
    default_prompt_id: str,
    default_agent_name: str,
) -> Optional[ChatHistory]:
    """Apply a reset if the message asks for one; return the fresh history or None."""
    command = parse_reset(message, default_prompt_id, default_agent_name)
    if command is None:
        return None
    history = store.create(caller_id, command.agent_name, command.prompt_id)
    logger.info(
        "Reset chat history for %s (prompt=%s, agent=%s)",
        caller_id, command.prompt_id, command.agent_name,
    )
    return history
