"""
Slack bot utilities.

Helpers shared by the Slack bot commands: URL extraction from user input,
message formatting, thread handling and direct chat.postMessage calls.
"""

from spacecat_api.utils.slack.base import (
    BACKTICKS,
    BOT_MENTION_REGEX,
    CHARACTER_LIMIT,
    FALLBACK_SLACK_CHANNEL,
    SLACK_API,
    SlackMessageError,
    extract_url_from_slack_input,
    get_message_from_event,
    get_query_params,
    get_slack_channel_id,
    get_thread_timestamp,
    post_error_message,
    post_site_not_found_message,
    post_slack_message,
    send_message_blocks,
    wrap_say_for_thread,
)

__all__ = [
    "BACKTICKS",
    "BOT_MENTION_REGEX",
    "CHARACTER_LIMIT",
    "FALLBACK_SLACK_CHANNEL",
    "SLACK_API",
    "SlackMessageError",
    "extract_url_from_slack_input",
    "get_message_from_event",
    "get_query_params",
    "get_slack_channel_id",
    "get_thread_timestamp",
    "post_error_message",
    "post_site_not_found_message",
    "post_slack_message",
    "send_message_blocks",
    "wrap_say_for_thread",
]
