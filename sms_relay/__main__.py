"""
Entry point for running the relay as a module:
    python -m sms_relay
"""

import asyncio
from .main import main

if __name__ == "__main__":
    asyncio.run(main())
