"""Status decorations on command lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class CommandStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


TOKEN_STATUSES: dict[str, CommandStatus] = {
    "[x]": CommandStatus.COMPLETED,
    "✅": CommandStatus.COMPLETED,
    "✓": CommandStatus.COMPLETED,
    "❌": CommandStatus.FAILED,
    "✗": CommandStatus.FAILED,
    "⏳": CommandStatus.IN_PROGRESS,
    "🔄": CommandStatus.IN_PROGRESS,
}

CANONICAL_TOKENS: dict[CommandStatus, str | None] = {
    CommandStatus.PENDING: None,
    CommandStatus.IN_PROGRESS: "⏳",
    CommandStatus.COMPLETED: "✅",
    CommandStatus.FAILED: "❌",
}

# Written by older releases; stripped on rewrite, never read as a status.
LEGACY_TOKENS = ("⚠\ufe0f", "⚠")

_KNOWN_PREFIX_RE = re.compile(r"^(?P<token>\[x\]|✅|✓|❌|✗|⏳|🔄)\ufe0f?\s*")
_STRIP_PREFIX_RE = re.compile(r"^(?:\[x\]|✅|✓|❌|✗|⏳|🔄|⚠)\ufe0f?\s*")


@dataclass(frozen=True)
class StatusDecoration:
    """A recognized status token and the status it encodes."""

    token: str
    status: CommandStatus

    @classmethod
    def for_status(cls, status: CommandStatus) -> StatusDecoration | None:
        token = CANONICAL_TOKENS[status]
        if token is None:
            return None
        return cls(token=token, status=status)


def parse_prefix(text: str) -> tuple[StatusDecoration | None, str]:
    """Split a leading status token off ``text``.

    Returns ``(None, text)`` when the text carries no recognized token. An
    unrecognized leading glyph is left in place, so the remainder will not
    look like a command.
    """

    match = _KNOWN_PREFIX_RE.match(text)
    if match is None:
        return None, text
    token = match.group("token")
    return StatusDecoration(token=token, status=TOKEN_STATUSES[token]), text[match.end() :]


def strip_decoration(text: str) -> str:
    """Remove any known or legacy status token from the start of ``text``."""

    return _STRIP_PREFIX_RE.sub("", text, count=1)


def coerce_status(value: CommandStatus | str) -> CommandStatus:
    """Accept a status enum, a status name, or a decoration token."""

    if isinstance(value, CommandStatus):
        return value
    candidate = value.strip().rstrip("\ufe0f")
    if candidate in TOKEN_STATUSES:
        return TOKEN_STATUSES[candidate]
    if candidate in LEGACY_TOKENS:
        return CommandStatus.FAILED
    return CommandStatus(candidate.lower())


def decorate(text: str, status: CommandStatus) -> str:
    """Render ``text`` with the canonical token for ``status``."""

    decoration = StatusDecoration.for_status(status)
    if decoration is None:
        return text
    return f"{decoration.token} {text}"
