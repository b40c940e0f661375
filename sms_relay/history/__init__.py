from .schema import ChatHistory, Turn
from .store import ChatHistoryStore

__all__ = ["ChatHistory", "ChatHistoryStore", "Turn"]
