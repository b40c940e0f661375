"""
In-memory chat history store, keyed by caller identifier.

Histories live only as long as the process. There is no persistence:
a restart forgets every conversation.
"""

import asyncio
import logging
from typing import Dict, Optional

from .schema import ChatHistory, Turn
from ..errors import HistoryNotFoundError

logger = logging.getLogger(__name__)


class ChatHistoryStore:
    """
    Maps caller identifiers to their ChatHistory.

    Holds at most one history per caller. `create` replaces any existing
    entry rather than merging into it. Each caller also gets a lazily
    created asyncio.Lock so that a request can run its create/get/add
    sequence without interleaving with another request from the same caller.
    """

    def __init__(self):
        self._histories: Dict[str, ChatHistory] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def create(self, caller_id: str, agent_name: str, prompt_id: str) -> ChatHistory:
        """Start a fresh, empty history for the caller, discarding any old one."""
        history = ChatHistory(
            caller_id=caller_id,
            agent_name=agent_name,
            prompt_id=prompt_id,
        )
        if caller_id in self._histories:
            logger.debug("Replacing chat history for %s", caller_id)
        self._histories[caller_id] = history
        return history

    def get(self, caller_id: str) -> Optional[ChatHistory]:
        """Return the caller's history, or None if there is none yet."""
        return self._histories.get(caller_id)

    def get_or_create(self, caller_id: str, agent_name: str, prompt_id: str) -> ChatHistory:
        history = self.get(caller_id)
        if history is None:
            history = self.create(caller_id, agent_name, prompt_id)
        return history

    def add(self, caller_id: str, text: str, speaker: str) -> None:
        """Append a turn to the caller's history.

        Raises:
            HistoryNotFoundError: if the caller has no history.
        """
        history = self._histories.get(caller_id)
        if history is None:
            raise HistoryNotFoundError(caller_id)
        history.turns.append(Turn(speaker=speaker, text=text))

    def lock(self, caller_id: str) -> asyncio.Lock:
        """Per-caller lock, created on first use."""
        lock = self._locks.get(caller_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[caller_id] = lock
        return lock

    def __contains__(self, caller_id: str) -> bool:
        return caller_id in self._histories

    def __len__(self) -> int:
        return len(self._histories)
