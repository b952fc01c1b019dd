"""Mention tokenizer for /commands, @agents, @files, @folders and $services."""

from __future__ import annotations

import re

from sparkmd.parser.types import Mention, MentionType

# A sigil glued to a word, another sigil, a slash or a dot is part of an
# email address or a path, not a mention.
_BOUNDARY = r"(?<![\w@$/.])"

MENTION_RE = re.compile(
    _BOUNDARY
    + r"(?:"
    r"/(?P<command>[A-Za-z][A-Za-z0-9-]*)(?![\w/-]|\.\w)"
    r"|\$(?P<service>[A-Za-z][A-Za-z0-9-]*)(?![\w$-]|\.\w)"
    r"|@(?P<path>[\w-]+(?:[./][\w-]+)*/?)"
    r")"
)
SPARK_SYNTAX_RE = re.compile(r"[@/$][A-Za-z0-9-]")
FILE_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]+$")


def parse_mentions(text: str) -> list[Mention]:
    """Return mentions in ``text`` ordered left to right."""

    mentions: list[Mention] = []
    for match in MENTION_RE.finditer(text):
        if match.group("command") is not None:
            mentions.append(Mention(MentionType.COMMAND, match.group("command"), match.group(0), match.start()))
        elif match.group("service") is not None:
            mentions.append(Mention(MentionType.SERVICE, match.group("service"), match.group(0), match.start()))
        else:
            path = match.group("path")
            mentions.append(Mention(classify_at_token(path), path, match.group(0), match.start()))
    return mentions


def classify_at_token(value: str) -> MentionType:
    """Classify the text after an ``@`` sigil."""

    if value.endswith("/"):
        return MentionType.FOLDER
    if "/" in value or FILE_EXTENSION_RE.search(value):
        return MentionType.FILE
    return MentionType.AGENT


def has_spark_syntax(line: str) -> bool:
    return SPARK_SYNTAX_RE.search(line) is not None
