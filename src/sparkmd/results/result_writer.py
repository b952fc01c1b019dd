"""Write AI results and status changes back into documents."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from sparkmd.errors import EmptyLineError, InlineChatNotFoundError, SparkError
from sparkmd.parser.command_detector import COMMAND_RE
from sparkmd.parser.inline_chat import find_inline_chat
from sparkmd.parser.markers import (
    RESULT_END_MARKER,
    RESULT_START_MARKER,
    is_chat_closer,
    parse_chat_opener,
    replace_chat_status,
)
from sparkmd.parser.status import CommandStatus, coerce_status, decorate, strip_decoration
from sparkmd.parser.types import ChatStatus
from sparkmd.results.document import Document

if TYPE_CHECKING:
    from sparkmd.config import Settings


class ResultWriter:
    """Apply one localized edit per call against freshly read file content.

    Line numbers from detection may be stale by the time a result lands, so
    every operation re-reads the file and re-derives its target first.
    """

    def __init__(self, *, add_blank_lines: bool = True) -> None:
        self.add_blank_lines = add_blank_lines

    @classmethod
    def from_settings(cls, settings: Settings) -> ResultWriter:
        return cls(add_blank_lines=settings.add_blank_lines)

    def write_inline(
        self,
        *,
        file_path: str | Path,
        command_line: int,
        command_text: str,
        result: str,
        add_blank_lines: bool | None = None,
    ) -> None:
        """Mark the command completed and insert a result block below it."""

        document = Document.load(file_path)
        target = _locate_command(document, command_line, command_text)
        indent, rest = _split_command_line(document.line(target))
        if not rest.strip():
            raise EmptyLineError(
                "Command line is empty", context={"file_path": str(file_path), "line": target}
            )

        document.replace_line(target, indent + decorate(rest, CommandStatus.COMPLETED))
        block = [RESULT_START_MARKER, *document.payload_lines(result), RESULT_END_MARKER]
        if add_blank_lines is None:
            add_blank_lines = self.add_blank_lines
        if add_blank_lines:
            block = ["", *block, ""]
        document.insert_after(target, block)
        document.save()
        logger.info(
            "result.write_inline file={} line={} result_length={} lines_added={}",
            file_path,
            target,
            len(result),
            len(block),
        )

    def update_status(
        self,
        *,
        file_path: str | Path,
        command_line: int,
        status: CommandStatus | str,
        command_text: str | None = None,
    ) -> bool:
        """Rewrite only the status decoration of a command line.

        Progress feedback is not critical: a missing file, a bad line or a
        line that is no longer a command is logged and ignored. Returns True
        when the line now carries ``status``.
        """

        try:
            new_status = coerce_status(status)
            document = Document.load(file_path)
            target = _locate_command(document, command_line, command_text)
        except (SparkError, ValueError) as exc:
            logger.warning("result.update_status skipped file={} line={} reason={}", file_path, command_line, exc)
            return False

        current = document.line(target)
        indent, rest = _split_command_line(current)
        if COMMAND_RE.match(rest) is None:
            logger.warning("result.update_status not a command file={} line={}", file_path, target)
            return False

        updated = indent + decorate(rest, new_status)
        if updated == current:
            return True
        document.replace_line(target, updated)
        try:
            document.save()
        except SparkError as exc:
            logger.warning("result.update_status write failed file={} reason={}", file_path, exc)
            return False
        logger.debug("result.update_status file={} line={} status={}", file_path, target, new_status.value)
        return True

    def update_inline_chat_status(
        self,
        *,
        file_path: str | Path,
        chat_id: str,
        start_line: int,
        end_line: int,
        status: ChatStatus | str,
    ) -> None:
        """Rewrite the status token of a chat's opening marker, nothing else."""

        document = Document.load(file_path)
        target = _locate_opener(document, chat_id, start_line, end_line)
        updated = replace_chat_status(document.line(target), status)
        if updated is None:
            raise InlineChatNotFoundError(f"No opening marker for inline chat {chat_id}", context={"chat_id": chat_id})
        document.replace_line(target, updated)
        document.save()
        logger.info(
            "result.inline_chat_status file={} chat_id={} status={}", file_path, chat_id, ChatStatus(status).value
        )

    def write_inline_chat_response(
        self,
        *,
        file_path: str | Path,
        chat_id: str,
        start_line: int,
        end_line: int,
        response: str,
    ) -> None:
        """Replace the whole chat block, markers included, with ``response``."""

        document = Document.load(file_path)
        document.check_range(start_line, end_line)
        start, end = _locate_chat(document, chat_id, start_line, end_line)
        response_lines = document.payload_lines(response)
        document.splice(start, end, response_lines)
        document.save()
        logger.info(
            "result.inline_chat_response file={} chat_id={} removed={} inserted={}",
            file_path,
            chat_id,
            end - start + 1,
            len(response_lines),
        )


def _split_command_line(line: str) -> tuple[str, str]:
    body = line.lstrip()
    indent = line[: len(line) - len(body)]
    return indent, strip_decoration(body)


def _command_body(line: str) -> str:
    return strip_decoration(line.strip()).strip()


def _locate_command(document: Document, command_line: int, command_text: str | None) -> int:
    document.check_line(command_line)
    if not command_text:
        return command_line
    wanted = _command_body(command_text)
    if not wanted or _command_body(document.lines[command_line - 1]) == wanted:
        return command_line
    matches = [number for number, line in enumerate(document.lines, start=1) if _command_body(line) == wanted]
    if len(matches) == 1:
        logger.info("result.command_moved file={} from_line={} to_line={}", document.path, command_line, matches[0])
        return matches[0]
    return command_line


def _opener_id(line: str) -> str | None:
    opener = parse_chat_opener(line)
    return opener.id if opener is not None else None


def _locate_opener(document: Document, chat_id: str, start_line: int, end_line: int) -> int:
    # The id decides; a stale range only matters when the id is gone.
    for number in range(max(start_line, 1), min(end_line, document.line_count) + 1):
        if _opener_id(document.lines[number - 1]) == chat_id:
            return number
    for number, line in enumerate(document.lines, start=1):
        if _opener_id(line) == chat_id:
            logger.info("result.inline_chat_moved file={} chat_id={} to_line={}", document.path, chat_id, number)
            return number
    document.check_range(start_line, end_line)
    raise InlineChatNotFoundError(
        f"No opening marker for inline chat {chat_id}",
        context={"file_path": str(document.path), "chat_id": chat_id, "start_line": start_line, "end_line": end_line},
    )


def _locate_chat(document: Document, chat_id: str, start_line: int, end_line: int) -> tuple[int, int]:
    if _opener_id(document.lines[start_line - 1]) == chat_id and is_chat_closer(document.lines[end_line - 1]):
        return start_line, end_line
    chat = find_inline_chat(document.text, chat_id)
    if chat is not None:
        logger.info(
            "result.inline_chat_moved file={} chat_id={} to_lines={}-{}",
            document.path,
            chat_id,
            chat.start_line,
            chat.end_line,
        )
        return chat.start_line, chat.end_line
    raise InlineChatNotFoundError(
        f"No inline chat block with id {chat_id}",
        context={"file_path": str(document.path), "chat_id": chat_id, "start_line": start_line, "end_line": end_line},
    )

