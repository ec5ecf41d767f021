"""Repository protocols."""

from naya.domain.repositories.history_repository import HistoryRepository

__all__ = ["HistoryRepository"]
