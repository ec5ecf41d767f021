"""Presentation layer."""

from naya.presentation.slack_handlers import register_handlers, should_relay

__all__ = ["register_handlers", "should_relay"]
