"""Line-addressed view of one document on disk."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from sparkmd.errors import DocumentNotFoundError, InvalidLineError, ResultWriteError


@dataclass
class Document:
    """Lines of a document as read right now, with its newline style."""

    path: Path
    lines: list[str]
    newline: str = "\n"

    @classmethod
    def load(cls, path: str | Path) -> Document:
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8", newline="") as handle:
                text = handle.read()
        except OSError as exc:
            raise DocumentNotFoundError(
                f"Cannot read document: {path}", context={"file_path": str(path), "reason": str(exc)}
            ) from exc
        return cls.from_text(path, text)

    @classmethod
    def from_text(cls, path: str | Path, text: str) -> Document:
        # Mixed endings split on "\n" only; a stray "\r" stays on its line.
        crlf = text.count("\r\n")
        newline = "\r\n" if crlf and crlf == text.count("\n") else "\n"
        return cls(path=Path(path), lines=text.split(newline), newline=newline)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return self.newline.join(self.lines)

    def check_line(self, number: int) -> None:
        if number < 1 or number > self.line_count:
            raise InvalidLineError(
                f"Invalid line number: {number} (file has {self.line_count} lines)",
                context={"file_path": str(self.path), "line": number, "line_count": self.line_count},
            )

    def check_range(self, start: int, end: int) -> None:
        if start < 1 or end > self.line_count or start > end:
            raise InvalidLineError(
                f"Invalid line numbers: {start}-{end} (file has {self.line_count} lines)",
                code="INVALID_LINE_RANGE",
                context={"file_path": str(self.path), "start_line": start, "end_line": end, "line_count": self.line_count},
            )

    def line(self, number: int) -> str:
        self.check_line(number)
        return self.lines[number - 1]

    def replace_line(self, number: int, text: str) -> None:
        self.check_line(number)
        self.lines[number - 1] = text

    def insert_after(self, number: int, new_lines: list[str]) -> None:
        self.check_line(number)
        self.lines[number:number] = new_lines

    def splice(self, start: int, end: int, new_lines: list[str]) -> None:
        """Replace lines ``start..end`` inclusive with ``new_lines``."""

        self.check_range(start, end)
        self.lines[start - 1 : end] = new_lines

    def payload_lines(self, text: str) -> list[str]:
        """Split inserted text into document lines."""

        return text.replace("\r\n", "\n").split("\n")

    def save(self) -> None:
        """Write through a temp file and rename, so readers never see a partial edit."""

        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                    handle.write(self.text)
                _copy_mode(self.path, Path(tmp_name))
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ResultWriteError(
                f"Failed to write document: {self.path}", context={"file_path": str(self.path), "reason": str(exc)}
            ) from exc


def _copy_mode(source: Path, target: Path) -> None:
    try:
        os.chmod(target, source.stat().st_mode & 0o7777)
    except OSError:
        return
