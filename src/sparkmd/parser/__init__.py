"""Detection of commands, inline chats and frontmatter in documents."""

from sparkmd.parser.command_detector import detect_commands, detect_line_command
from sparkmd.parser.file_parser import FileParser
from sparkmd.parser.frontmatter import FrontmatterChange, FrontmatterTracker, extract_frontmatter
from sparkmd.parser.inline_chat import (
    detect_inline_chats,
    get_pending_inline_chats,
    has_pending_inline_chats,
    is_inside_inline_chat,
)
from sparkmd.parser.mentions import parse_mentions
from sparkmd.parser.status import CommandStatus
from sparkmd.parser.types import ChatStatus, DetectedCommand, InlineChatBlock, Mention, MentionType, ParsedFile

__all__ = [
    "ChatStatus",
    "CommandStatus",
    "DetectedCommand",
    "FileParser",
    "FrontmatterChange",
    "FrontmatterTracker",
    "InlineChatBlock",
    "Mention",
    "MentionType",
    "ParsedFile",
    "detect_commands",
    "detect_inline_chats",
    "detect_line_command",
    "extract_frontmatter",
    "get_pending_inline_chats",
    "has_pending_inline_chats",
    "is_inside_inline_chat",
    "parse_mentions",
]
