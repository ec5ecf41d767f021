"""Event handlers."""

from naya.application.handlers.message_handler import MessageEventHandler
from naya.application.handlers.reply_handler import ReplyEventHandler

__all__ = ["MessageEventHandler", "ReplyEventHandler"]
