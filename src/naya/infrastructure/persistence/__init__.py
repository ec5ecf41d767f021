"""In-memory persistence."""

from naya.infrastructure.persistence.history_store import InMemoryHistoryStore

__all__ = ["InMemoryHistoryStore"]
