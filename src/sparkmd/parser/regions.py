"""Exclusion regions: fenced code, open inline chats and AI result blocks."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from sparkmd.parser.markers import is_chat_closer, is_code_fence, is_result_end, is_result_start, parse_chat_opener


class Region(str, Enum):
    NORMAL = "normal"
    IN_CODE_FENCE = "in_code_fence"
    IN_CHAT_BLOCK = "in_chat_block"
    IN_RESULT_BLOCK = "in_result_block"


class LineKind(str, Enum):
    TEXT = "text"
    FENCE = "fence"
    CHAT_OPEN = "chat_open"
    CHAT_CLOSE = "chat_close"
    RESULT_START = "result_start"
    RESULT_END = "result_end"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, so numbering matches what the writers see."""

    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def classify_line(line: str) -> LineKind:
    if is_result_start(line):
        return LineKind.RESULT_START
    if is_result_end(line):
        return LineKind.RESULT_END
    if parse_chat_opener(line) is not None:
        return LineKind.CHAT_OPEN
    if is_chat_closer(line):
        return LineKind.CHAT_CLOSE
    if is_code_fence(line):
        return LineKind.FENCE
    return LineKind.TEXT


# (current region, line kind) -> next region. Pairs not listed keep the region.
_TRANSITIONS: dict[tuple[Region, LineKind], Region] = {
    (Region.NORMAL, LineKind.FENCE): Region.IN_CODE_FENCE,
    (Region.NORMAL, LineKind.CHAT_OPEN): Region.IN_CHAT_BLOCK,
    (Region.NORMAL, LineKind.RESULT_START): Region.IN_RESULT_BLOCK,
    (Region.IN_CODE_FENCE, LineKind.FENCE): Region.NORMAL,
    (Region.IN_CHAT_BLOCK, LineKind.CHAT_CLOSE): Region.NORMAL,
    (Region.IN_RESULT_BLOCK, LineKind.RESULT_END): Region.NORMAL,
}


@dataclass
class RegionTracker:
    """Left-to-right region state over the lines of one document."""

    region: Region = Region.NORMAL

    def feed(self, line: str) -> bool:
        """Advance over ``line``; return True if it is eligible content."""

        kind = classify_line(line)
        eligible = self.region is Region.NORMAL and kind is LineKind.TEXT
        self.region = _TRANSITIONS.get((self.region, kind), self.region)
        return eligible


def scan_regions(text: str) -> list[Region]:
    """Region each line starts in, one entry per line."""

    tracker = RegionTracker()
    regions: list[Region] = []
    for line in split_lines(text):
        regions.append(tracker.region)
        tracker.feed(line)
    return regions


def iter_eligible_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for lines outside every exclusion region."""

    tracker = RegionTracker()
    for index, line in enumerate(split_lines(text), start=1):
        if tracker.feed(line):
            yield index, line
