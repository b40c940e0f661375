"""
Chat relay: turns an inbound text from a caller into a model reply,
keeping the caller's transcript along the way.
"""

import logging
from dataclasses import dataclass

from .commands import handle_possible_reset
from .history import ChatHistoryStore
from .intelligence import CompletionClient, PromptProvider
from .prompting import PromptCompactor

logger = logging.getLogger(__name__)

USER_SPEAKER = "User"


@dataclass
class Reply:
    text: str


class ChatRelay:
    """
    Orchestrates one request: reset detection, history lookup, prompt
    compaction, completion, and recording the agent's reply.

    Requests from the same caller are serialized on that caller's lock;
    requests from different callers run concurrently.
    """

    def __init__(
        self,
        store: ChatHistoryStore,
        prompts: PromptProvider,
        llm: CompletionClient,
        compactor: PromptCompactor,
        default_agent_name: str = "Assistant",
        default_prompt_id: str = "",
    ):
        self.store = store
        self.prompts = prompts
        self.llm = llm
        self.compactor = compactor
        self.default_agent_name = default_agent_name
        self.default_prompt_id = default_prompt_id

    async def get_reply(self, message: str, caller_id: str) -> Reply:
        """
        Record the caller's message and return the agent's reply.

        If anything fails after the message is recorded, the user turn stays
        in the history, no agent turn is added, and the error propagates.
        """
        message = message.strip()
        logger.info("Message from %s (%d chars)", caller_id, len(message))
        logger.debug("Message from %s: %s", caller_id, message)

        async with self.store.lock(caller_id):
            history = handle_possible_reset(
                self.store, caller_id, message,
                self.default_prompt_id, self.default_agent_name,
            )
            if history is None:
                history = self.store.get_or_create(
                    caller_id, self.default_agent_name, self.default_prompt_id
                )
            self.store.add(caller_id, message, USER_SPEAKER)

            spec = await self.prompts.get_prompt(history.prompt_id)
            compacted = self.compactor.compact(history.turns, spec.template_text)
            logger.debug("Prompt for %s:\n%s", caller_id, compacted.prompt)

            text = await self.llm.complete(compacted.prompt, spec.parameters)
            self.store.add(caller_id, text, history.agent_name)

        logger.info("%s replied to %s (%d chars)", history.agent_name, caller_id, len(text))
        return Reply(text=text)
