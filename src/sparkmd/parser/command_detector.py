"""Slash command detection."""

from __future__ import annotations

import re

from sparkmd.parser.mentions import has_spark_syntax, parse_mentions
from sparkmd.parser.regions import iter_eligible_lines
from sparkmd.parser.status import CommandStatus, parse_prefix
from sparkmd.parser.types import DetectedCommand

COMMAND_RE = re.compile(r"^/(?P<command>[A-Za-z][A-Za-z0-9-]*)(?![\w/-]|\.\w)")
SENTENCE_ENDERS = (".", "?", "!")


def detect_commands(text: str) -> list[DetectedCommand]:
    """Detect commands outside code fences, chat blocks and result blocks."""

    commands: list[DetectedCommand] = []
    for line_number, line in iter_eligible_lines(text):
        command = detect_line_command(line, line_number)
        if command is not None:
            commands.append(command)
    return commands


def detect_line_command(line: str, line_number: int = 1) -> DetectedCommand | None:
    """Detect whether one line is a (possibly decorated) slash command."""

    body = line.lstrip()
    if not body or not has_spark_syntax(body):
        return None

    decoration, rest = parse_prefix(body)
    match = COMMAND_RE.match(rest)
    if match is None:
        return None

    status = decoration.status if decoration is not None else CommandStatus.PENDING
    text = rest.strip()
    args = rest[match.end() :].strip()
    return DetectedCommand(
        command=match.group("command"),
        status=status,
        raw=line.strip(),
        line=line_number,
        text=text,
        status_emoji=decoration.token if decoration is not None else None,
        args=args or None,
        is_complete=_is_complete(rest),
        mentions=parse_mentions(text) if status is CommandStatus.PENDING else [],
    )


def _is_complete(text: str) -> bool:
    # Trailing whitespace means the author is probably still typing.
    stripped = text.strip()
    if not stripped or text.rstrip() != text:
        return False
    return stripped.endswith(SENTENCE_ENDERS)
