"""
Main orchestrator: wires all components together and runs the HTTP gateway.
Entry point: python -m sms_relay
"""

import asyncio
import logging
import signal

from .config import AppConfig
from .history import ChatHistoryStore
from .intelligence import CompletionClient, create_prompt_provider
from .presentation import RelayServer
from .prompting import PromptCompactor, TiktokenTokenizer
from .relay import ChatRelay

logger = logging.getLogger("sms_relay")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_relay(config: AppConfig, prompts=None, llm=None) -> ChatRelay:
    """Assemble a ChatRelay from config. Adapters can be passed in pre-built."""
    tokenizer = TiktokenTokenizer(config.compaction.encoding)
    compactor = PromptCompactor(tokenizer, max_tokens=config.compaction.max_tokens)
    if prompts is None:
        prompts = create_prompt_provider(config.prompts)
    if llm is None:
        llm = CompletionClient(config.llm)
    return ChatRelay(
        store=ChatHistoryStore(),
        prompts=prompts,
        llm=llm,
        compactor=compactor,
        default_agent_name=config.default_agent_name,
        default_prompt_id=config.default_prompt_id,
    )


async def main():
    """Bootstrap and run all system components."""
    config = AppConfig.from_env()
    setup_logging(config.log_level)

    logger.info("SMS relay starting up")

    # ── 1. Initialize adapters ─────────────────────────────────
    relay = build_relay(config)
    await relay.prompts.initialize()
    await relay.llm.initialize()

    # ── 2. Start HTTP gateway ──────────────────────────────────
    server = RelayServer(config.server, relay)

    # ── 3. Graceful shutdown handling ──────────────────────────
    shutdown_event = asyncio.Event()

    def _signal_handler():
        logger.info("Shutdown signal received")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            pass  # Windows

    serve_task = asyncio.create_task(server.start())
    shutdown_task = asyncio.create_task(shutdown_event.wait())
    try:
        await asyncio.wait(
            [serve_task, shutdown_task],
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("Shutting down...")
        shutdown_task.cancel()
        await server.stop()
        await asyncio.gather(serve_task, return_exceptions=True)
        await relay.llm.close()
        await relay.prompts.close()
        logger.info("Bye")


if __name__ == "__main__":
    asyncio.run(main())
