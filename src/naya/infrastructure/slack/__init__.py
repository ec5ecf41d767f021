"""Slack integration."""

from naya.infrastructure.slack.client import SlackAppRunner, create_slack_app
from naya.infrastructure.slack.event_adapter import SlackEventAdapter
from naya.infrastructure.slack.media import SlackMediaDownloader
from naya.infrastructure.slack.messaging import SlackMessagingService

__all__ = [
    "SlackAppRunner",
    "SlackEventAdapter",
    "SlackMediaDownloader",
    "SlackMessagingService",
    "create_slack_app",
]
