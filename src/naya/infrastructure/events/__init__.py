"""Event system infrastructure."""

from naya.infrastructure.events.dispatcher import EventDispatcher, event_handler
from naya.infrastructure.events.loop import EventLoop
from naya.infrastructure.events.queue import EventQueue

__all__ = [
    "EventDispatcher",
    "EventLoop",
    "EventQueue",
    "event_handler",
]
