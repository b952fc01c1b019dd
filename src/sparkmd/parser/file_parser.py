"""Compose frontmatter, command and inline chat detection for one document."""

from __future__ import annotations

from pathlib import Path

from sparkmd.parser.command_detector import detect_commands
from sparkmd.parser.frontmatter import extract_frontmatter
from sparkmd.parser.inline_chat import detect_inline_chats
from sparkmd.parser.status import CommandStatus
from sparkmd.parser.types import ChatStatus, DetectedCommand, InlineChatBlock, ParsedFile


class FileParser:
    """Parse documents into commands, inline chats and frontmatter."""

    def parse_file(self, path: str | Path, text: str) -> ParsedFile:
        return ParsedFile(
            path=str(path),
            frontmatter=extract_frontmatter(text),
            commands=detect_commands(text),
            inline_chats=detect_inline_chats(text),
        )

    def parse_path(self, path: str | Path) -> ParsedFile:
        path = Path(path)
        with path.open("r", encoding="utf-8", newline="") as handle:
            return self.parse_file(path, handle.read())

    @staticmethod
    def has_pending_commands(parsed: ParsedFile) -> bool:
        return any(command.status is CommandStatus.PENDING for command in parsed.commands)

    @staticmethod
    def has_pending_inline_chats(parsed: ParsedFile) -> bool:
        return any(chat.status is ChatStatus.PENDING for chat in parsed.inline_chats)

    @staticmethod
    def pending_commands(parsed: ParsedFile) -> list[DetectedCommand]:
        return [command for command in parsed.commands if command.status is CommandStatus.PENDING]

    @staticmethod
    def pending_inline_chats(parsed: ParsedFile) -> list[InlineChatBlock]:
        return [chat for chat in parsed.inline_chats if chat.status is ChatStatus.PENDING]
