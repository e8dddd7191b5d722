"""
Webhook boundary module.

Exports: PullRequestWebhookClient
"""

from .pull_request_client import PullRequestWebhookClient

__all__ = ["PullRequestWebhookClient"]
