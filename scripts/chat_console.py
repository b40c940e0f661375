#!/usr/bin/env python3
"""
Chat with the relay from a terminal, as if texting from a phone.

Type "reset" or "reset <prompt_id> <agent_name>" to start over, Ctrl-D to quit.
"""

import argparse
import asyncio
import logging
import sys
import os

# Add root to sys.path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sms_relay.config import AppConfig
from sms_relay.errors import RelayError
from sms_relay.main import build_relay, setup_logging

logger = logging.getLogger("console")


async def run_console(caller_id: str):
    config = AppConfig.from_env()
    setup_logging(config.log_level)

    relay = build_relay(config)
    await relay.prompts.initialize()
    await relay.llm.initialize()

    print("=" * 50)
    print(f"Chatting as {caller_id} (model={config.llm.model})")
    print("=" * 50)

    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            if not line.strip():
                continue
            try:
                reply = await relay.get_reply(line, caller_id)
            except RelayError as e:
                print(f"[error] {type(e).__name__}: {e}")
                continue
            history = relay.store.get(caller_id)
            print(f"{history.agent_name}: {reply.text}")
    except KeyboardInterrupt:
        pass
    finally:
        await relay.llm.close()
        await relay.prompts.close()
        print("Bye!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--caller", default="console", help="Caller id to chat as")
    args = parser.parse_args()
    asyncio.run(run_console(args.caller))
