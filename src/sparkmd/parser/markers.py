"""Comment markers embedded in documents: inline chats and result blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sparkmd.parser.types import ChatStatus

CHAT_MARKER_NAME = "spark-inline-chat"
CHAT_CLOSE_MARKER = "<!-- /spark-inline-chat -->"
RESULT_START_MARKER = "<!-- spark-result-start -->"
RESULT_END_MARKER = "<!-- spark-result-end -->"
CODE_FENCE = "```"

CHAT_OPEN_RE = re.compile(
    r"<!--\s*spark-inline-chat\s*:\s*(?P<status>pending|processing|complete|error)\s*:\s*(?P<payload>.*?)\s*-->"
)
CHAT_CLOSE_RE = re.compile(r"<!--\s*/\s*spark-inline-chat\s*-->")
RESULT_START_RE = re.compile(r"^<!--\s*spark-result-start\s*-->$")
RESULT_END_RE = re.compile(r"^<!--\s*spark-result-end\s*-->$")
CHAT_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class ChatOpener:
    """Fields of one opening marker, legacy or extended."""

    status: ChatStatus
    id: str
    payload: str
    agent: str | None = None
    message: str | None = None

    @property
    def is_extended(self) -> bool:
        return self.agent is not None


def parse_chat_opener(line: str) -> ChatOpener | None:
    """Parse ``<!-- spark-inline-chat:status:id[:agent[:message]] -->``."""

    match = CHAT_OPEN_RE.search(line)
    if match is None:
        return None
    payload = match.group("payload")
    fields = payload.split(":", 2)
    chat_id = fields[0].strip()
    if not CHAT_ID_RE.match(chat_id):
        return None
    agent = fields[1].strip() if len(fields) > 1 else None
    message = unescape_message(fields[2].strip()) if len(fields) > 2 else None
    return ChatOpener(
        status=ChatStatus(match.group("status")),
        id=chat_id,
        payload=payload,
        agent=agent or None,
        message=message or None,
    )


def is_chat_closer(line: str) -> bool:
    return CHAT_CLOSE_RE.search(line) is not None


def is_result_start(line: str) -> bool:
    return RESULT_START_RE.match(line.strip()) is not None


def is_result_end(line: str) -> bool:
    return RESULT_END_RE.match(line.strip()) is not None


def is_code_fence(line: str) -> bool:
    return line.strip().startswith(CODE_FENCE)


def escape_message(message: str) -> str:
    return message.replace("\r\n", "\n").replace("\n", "\\n")


def unescape_message(message: str) -> str:
    return message.replace("\\n", "\n")


def render_chat_opener(
    status: ChatStatus | str,
    chat_id: str,
    agent: str | None = None,
    message: str | None = None,
) -> str:
    """Render an opening marker with canonical padding."""

    fields = [CHAT_MARKER_NAME, ChatStatus(status).value, chat_id]
    if agent is not None:
        fields.append(agent)
        if message is not None:
            fields.append(escape_message(message))
    return f"<!-- {':'.join(fields)} -->"


def replace_chat_status(line: str, status: ChatStatus | str) -> str | None:
    """Rewrite the status token of the opener on ``line``.

    The id, agent and message payload are carried over byte for byte. Returns
    None when the line holds no opener.
    """

    match = CHAT_OPEN_RE.search(line)
    if match is None:
        return None
    marker = f"<!-- {CHAT_MARKER_NAME}:{ChatStatus(status).value}:{match.group('payload')} -->"
    return line[: match.start()] + marker + line[match.end() :]
