"""Inline chat block detection."""

from __future__ import annotations

import re

from loguru import logger

from sparkmd.parser.markers import ChatOpener, is_chat_closer, parse_chat_opener
from sparkmd.parser.mentions import parse_mentions
from sparkmd.parser.regions import Region, RegionTracker, split_lines
from sparkmd.parser.types import ChatStatus, InlineChatBlock

USER_LINE_RE = re.compile(r"^\s*User:\s*(?P<message>.*)$")


def detect_inline_chats(text: str) -> list[InlineChatBlock]:
    """Detect every closed inline chat block, in line order.

    An opener with no closer before EOF yields nothing, as does a closer with
    no opener. Openers inside fenced code or result blocks are not chats.
    """

    lines = split_lines(text)
    chats: list[InlineChatBlock] = []
    tracker = RegionTracker()
    index = 0
    while index < len(lines):
        line = lines[index]
        if tracker.region is Region.NORMAL:
            opener = parse_chat_opener(line)
            if opener is not None:
                end = _find_closer(lines, index + 1)
                if end is not None:
                    chats.append(_build_block(opener, lines, index, end))
                    index = end + 1
                else:
                    logger.debug("inline_chat.unclosed id={} line={}", opener.id, index + 1)
                    index += 1
                continue
        tracker.feed(line)
        index += 1
    return chats


def has_pending_inline_chats(text: str) -> bool:
    return any(chat.status is ChatStatus.PENDING for chat in detect_inline_chats(text))


def get_pending_inline_chats(text: str) -> list[InlineChatBlock]:
    return [chat for chat in detect_inline_chats(text) if chat.status is ChatStatus.PENDING]


def is_inside_inline_chat(text: str, line: int) -> bool:
    """Whether 1-based ``line`` falls within any detected chat block."""

    return any(chat.contains(line) for chat in detect_inline_chats(text))


def find_inline_chat(text: str, chat_id: str) -> InlineChatBlock | None:
    for chat in detect_inline_chats(text):
        if chat.id == chat_id:
            return chat
    return None


def _find_closer(lines: list[str], start: int) -> int | None:
    for index in range(start, len(lines)):
        if is_chat_closer(lines[index]):
            return index
    return None


def _build_block(opener: ChatOpener, lines: list[str], start: int, end: int) -> InlineChatBlock:
    body = lines[start + 1 : end]
    raw = "\n".join(lines[start : end + 1])
    common = {
        "id": opener.id,
        "status": opener.status,
        "start_line": start + 1,
        "end_line": end + 1,
        "raw": raw,
        "agent": opener.agent,
    }

    if opener.status is ChatStatus.COMPLETE:
        return InlineChatBlock(**common, ai_response="\n".join(body))

    user_message = _user_message(opener, body)
    mentions = parse_mentions(user_message) if opener.status is ChatStatus.PENDING else None
    return InlineChatBlock(**common, user_message=user_message, mentions=mentions)


def _user_message(opener: ChatOpener, body: list[str]) -> str:
    # An empty message field reads the body like a legacy marker does.
    message = opener.message if opener.message is not None else _legacy_message(body)
    if opener.agent is None:
        return message
    prefix = f"@{opener.agent}"
    if re.match(re.escape(prefix) + r"(?![\w./-])", message):
        return message
    return f"{prefix} {message}" if message else prefix


def _legacy_message(body: list[str]) -> str:
    if not body:
        return ""
    first = body[0]
    match = USER_LINE_RE.match(first)
    if match is not None:
        return match.group("message").strip()
    return first.strip()
