"""Shared parser dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sparkmd.parser.status import CommandStatus


class MentionType(str, Enum):
    COMMAND = "command"
    FILE = "file"
    FOLDER = "folder"
    AGENT = "agent"
    SERVICE = "service"


class ChatStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class Mention:
    """Typed reference token found in a line or message."""

    type: MentionType
    value: str
    raw: str
    position: int


@dataclass(frozen=True)
class DetectedCommand:
    """Slash command detected on one document line."""

    command: str
    status: CommandStatus
    raw: str
    line: int
    text: str
    status_emoji: str | None = None
    args: str | None = None
    is_complete: bool = False
    mentions: list[Mention] = field(default_factory=list)


@dataclass(frozen=True)
class InlineChatBlock:
    """One chat turn enclosed by an opening and closing marker."""

    id: str
    status: ChatStatus
    start_line: int
    end_line: int
    raw: str
    user_message: str | None = None
    ai_response: str | None = None
    agent: str | None = None
    mentions: list[Mention] | None = None

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class ParsedFile:
    """Everything the dispatch layer needs from one read of a document."""

    path: str
    frontmatter: dict[str, Any]
    commands: list[DetectedCommand]
    inline_chats: list[InlineChatBlock]
