"""Application services."""

from naya.application.services.reply_dispatcher import ReplyDispatcher

__all__ = ["ReplyDispatcher"]
