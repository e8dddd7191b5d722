"""
Slack boundary module.

Exports: SlackClient
"""

from .slack_client import SlackClient

__all__ = ["SlackClient"]
