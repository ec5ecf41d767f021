"""Naya: a chat relay bot with a short rolling context window."""
