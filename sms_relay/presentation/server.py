"""
FastAPI HTTP gateway exposing the relay to SMS webhooks and other callers.
"""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ..config import ServerConfig
from ..errors import RelayError, TokenizationError, UpstreamError
from ..relay import ChatRelay

logger = logging.getLogger(__name__)


class ReplyRequest(BaseModel):
    message: str = Field(..., description="Text sent by the caller")
    caller_id: str = Field(..., min_length=1, description="Caller phone number")


class ReplyResponse(BaseModel):
    text: str


class RelayServer:
    """
    FastAPI-based server that forwards inbound messages to the ChatRelay.
    """

    def __init__(self, config: ServerConfig, relay: ChatRelay):
        self.config = config
        self.relay = relay
        self.app = FastAPI(title="SMS Relay", docs_url=None)
        self._server = None

        self._setup_routes()

    def _setup_routes(self):
        """Configure FastAPI routes."""

        @self.app.get("/health")
        async def health():
            return {"status": "ok", "conversations": len(self.relay.store)}

        @self.app.post("/reply", response_model=ReplyResponse)
        async def reply(req: ReplyRequest) -> ReplyResponse:
            try:
                result = await self.relay.get_reply(req.message, req.caller_id)
            except UpstreamError as e:
                logger.warning("Upstream failure for %s: %s", req.caller_id, e)
                raise HTTPException(status_code=502, detail=str(e))
            except TokenizationError as e:
                logger.warning("Unencodable message from %s: %s", req.caller_id, e)
                raise HTTPException(status_code=422, detail=str(e))
            except RelayError as e:
                logger.exception("Relay failed for %s", req.caller_id)
                raise HTTPException(status_code=500, detail=str(e))
            return ReplyResponse(text=result.text)

    async def start(self):
        """Start the uvicorn server."""
        import uvicorn
        config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        logger.info(
            "HTTP server starting on %s:%d",
            self.config.host, self.config.port
        )
        await self._server.serve()

    async def stop(self):
        """Ask uvicorn to exit."""
        if self._server is not None:
            self._server.should_exit = True
        logger.info("HTTP server stopped")
