"""
Slack bot base utilities.

``say`` callables follow the Slack Bolt convention: an async function
accepting either a string or a message dict.

Dependencies: httpx
System role: Message formatting and posting helpers for the Slack bot
"""

import json
import re
from typing import Any, Awaitable, Callable
from urllib.parse import urlparse

import httpx

BACKTICKS = "```"
BOT_MENTION_REGEX = re.compile(r"^<@[^>]+>\s+")
CHARACTER_LIMIT = 2500
SLACK_API = "https://slack.com/api/chat.postMessage"
FALLBACK_SLACK_CHANNEL = "C060T2PPF8V"

SLACK_URL_FORMAT_REGEX = re.compile(
    r"(?:https?://)?(?:www\.)?([a-zA-Z0-9.-]+)\.([a-zA-Z]{2,})([/\w.-]*/?)"
)

Say = Callable[[Any], Awaitable[Any]]


class SlackMessageError(Exception):
    """Raised when a Slack message cannot be sent."""


def extract_url_from_slack_input(
    text: Any,
    domain_only: bool = False,
    include_scheme: bool = True,
) -> str | None:
    """
    Extract a URL from free-form Slack input.

    Slack wraps links as ``<http://x.com|x.com>``; the first URL-looking
    token is used either way. A missing scheme is assumed to be http and a
    leading ``www.`` is dropped. Bare domains lose their trailing slash,
    while paths are kept as typed.

    Args:
        text: Raw message text
        domain_only: Return only the host name
        include_scheme: Prefix the result with https://

    Returns:
        str | None: Normalized URL, or None when no URL is present
    """
    if not isinstance(text, str):
        return None

    match = SLACK_URL_FORMAT_REGEX.search(text)
    if not match:
        return None

    token = match.group(0)
    url_token = token if "://" in token else f"http://{token}"
    parsed = urlparse(url_token)
    hostname = re.sub(r"^www\.", "", parsed.hostname or "")

    if domain_only:
        return hostname

    path = parsed.path
    has_path = bool(path) and path != "/"
    base_url = f"{hostname}{path}" if has_path else hostname

    return f"https://{base_url}" if include_scheme else base_url


async def post_error_message(say: Say, error: Exception) -> None:
    await say(f":nuclear-warning: Oops! Something went wrong: {error}")


async def post_site_not_found_message(say: Say, base_url: str) -> None:
    await say(f":x: No site found with base URL '{base_url}'.")


async def send_message_blocks(
    say: Say,
    text_sections: list[dict[str, Any]],
    additional_blocks: list[dict[str, Any]] | None = None,
) -> None:
    """
    Send mrkdwn section blocks, one per text section.

    Args:
        say: Slack say function
        text_sections: Dicts with "text" and an optional "accessory"
        additional_blocks: Blocks appended after the sections
    """
    blocks = []
    for section in text_sections:
        block: dict[str, Any] = {
            "type": "section",
            "text": {"type": "mrkdwn", "text": section["text"]},
        }
        if section.get("accessory"):
            block["accessory"] = section["accessory"]
        blocks.append(block)

    blocks.extend(additional_blocks or [])
    await say({"blocks": blocks})


def get_query_params(channel_id: str, message: str) -> dict[str, str]:
    """Query parameters for chat.postMessage with a single mrkdwn block."""
    return {
        "channel": channel_id,
        "blocks": json.dumps(
            [{"type": "section", "text": {"type": "mrkdwn", "text": message}}]
        ),
    }


def get_slack_channel_id(target: str, target_channels: str = "") -> str:
    """
    Resolve a channel id from a ``target=channel`` list.

    Args:
        target: Target name to look up
        target_channels: Comma separated ``name=channelId`` pairs

    Returns:
        str: Configured channel id, or FALLBACK_SLACK_CHANNEL
    """
    for pair in (target_channels or "").split(","):
        if pair.startswith(f"{target}=") and len(pair.strip()) > len(target) + 1:
            return pair.split("=")[1].strip()
    return FALLBACK_SLACK_CHANNEL


async def post_slack_message(
    channel_id: str,
    message: str,
    token: str,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """
    Post a message to a Slack channel.

    Args:
        channel_id: Channel to post to
        message: mrkdwn message text
        token: Slack bot token
        http_client: Optional shared client; a short-lived one is used otherwise

    Returns:
        dict: {"channel", "ts"} of the posted message

    Raises:
        SlackMessageError: If the token is missing or Slack rejects the message
    """
    if not isinstance(token, str) or not token.strip():
        raise SlackMessageError("Missing slack bot token")

    params = get_query_params(channel_id, message)
    headers = {"Authorization": f"Bearer {token}"}
    if http_client is not None:
        resp = await http_client.get(SLACK_API, params=params, headers=headers)
    else:
        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.get(SLACK_API, params=params, headers=headers)

    if resp.status_code != 200:
        raise SlackMessageError(
            f"Failed to send initial slack message. Status: {resp.status_code}"
        )

    body = resp.json()
    if not body.get("ok"):
        raise SlackMessageError(
            f"Slack message was not acknowledged. Error: {body.get('error')}"
        )

    return {"channel": body.get("channel"), "ts": body.get("ts")}


def get_thread_timestamp(event: dict[str, Any]) -> str | None:
    """Timestamp of the thread an event belongs to (its own ts if top level)."""
    return event.get("thread_ts") or event.get("ts")


def get_message_from_event(event: dict[str, Any]) -> str | None:
    """Event text without the leading bot mention."""
    text = event.get("text")
    if text is None:
        return None
    return BOT_MENTION_REGEX.sub("", text).strip()


def wrap_say_for_thread(say: Say, thread_ts: str | None) -> Say:
    """
    Wrap a say function so every message is posted in a thread.

    Args:
        say: Original Slack say function
        thread_ts: Timestamp of the thread to respond in

    Returns:
        Say: Wrapped function, exposing the thread as ``.thread_ts``
    """

    async def wrapped(message: Any) -> None:
        options = {"text": message} if isinstance(message, str) else dict(message)
        await say({**options, "thread_ts": thread_ts})

    wrapped.thread_ts = thread_ts
    return wrapped
