"""
Tests for the HTTP gateway using FastAPI's TestClient.
"""

import os
import sys

from fastapi.testclient import TestClient

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sms_relay.config import ServerConfig
from sms_relay.errors import TokenizationError, UpstreamError
from sms_relay.presentation import RelayServer
from sms_relay.relay import Reply


class FakeRelay:
    def __init__(self, reply="Hello!", error=None):
        self.reply = reply
        self.error = error
        self.store = {}
        self.calls = []

    async def get_reply(self, message, caller_id):
        self.calls.append((message, caller_id))
        if self.error:
            raise self.error
        return Reply(text=self.reply)


def client_for(relay):
    return TestClient(RelayServer(ServerConfig(), relay).app)


class TestRelayServer:

    def test_health(self):
        response = client_for(FakeRelay()).get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_reply(self):
        relay = FakeRelay(reply="Hello!")
        response = client_for(relay).post("/reply", json={"message": "Hi", "caller_id": "555"})
        assert response.status_code == 200
        assert response.json() == {"text": "Hello!"}
        assert relay.calls == [("Hi", "555")]

    def test_missing_caller_id(self):
        response = client_for(FakeRelay()).post("/reply", json={"message": "Hi"})
        assert response.status_code == 422

    def test_upstream_failure_maps_to_502(self):
        relay = FakeRelay(error=UpstreamError("completion API down"))
        response = client_for(relay).post("/reply", json={"message": "Hi", "caller_id": "555"})
        assert response.status_code == 502

    def test_tokenization_failure_maps_to_422(self):
        relay = FakeRelay(error=TokenizationError("special token"))
        response = client_for(relay).post("/reply", json={"message": "<|endoftext|>", "caller_id": "555"})
        assert response.status_code == 422
